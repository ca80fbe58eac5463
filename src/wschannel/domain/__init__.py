"""Domain layer: types, events, errors and protocols shared by every layer."""
