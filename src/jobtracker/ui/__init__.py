"""Terminal UI: action dispatch core, terminal driver and components."""
