"""Domain layer: business rules and orchestration."""
