"""External system integrations (ABC, real and fake implementations)."""
