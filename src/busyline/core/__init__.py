"""Platform-independent building blocks: state, defaults, settings."""
