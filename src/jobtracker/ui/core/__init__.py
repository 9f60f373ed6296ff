"""Action dispatch core: actions, modes, focus, keys, channel, registry."""
