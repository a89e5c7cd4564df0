"""Infrastructure: persistence, cloud adapters, security."""
