"""Domain models: coordinates and located drivers."""
