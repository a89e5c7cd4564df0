"""External service adapters: object storage, notification topics, database control."""
