"""HTTP API: dependencies, endpoint modules and the router that mounts them."""
