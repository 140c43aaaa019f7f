"""Infrastructure layer: persistence, security and outbound integrations."""
