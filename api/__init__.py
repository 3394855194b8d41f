"""HTTP routers of the SmartDiet API."""
