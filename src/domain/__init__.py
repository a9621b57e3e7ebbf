"""Domain layer: entities, value objects and the rules that bind them."""
