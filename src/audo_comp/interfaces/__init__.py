"""Interface adapters (CLI) delegating to application services."""
