"""Storage infrastructure: engine, sessions and SQLModel repositories."""
