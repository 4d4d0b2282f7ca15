"""World systems: deterministic RNG and the spawn predicate."""
