"""Domain layer: identity records and the contracts that persist them."""
