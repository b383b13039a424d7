"""Core configuration, paths and theming for filesweep."""
