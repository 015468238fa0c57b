"""Domain services; each takes the request's database session."""
