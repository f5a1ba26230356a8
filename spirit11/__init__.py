"""Spirit11 fantasy cricket scoring and team building."""
