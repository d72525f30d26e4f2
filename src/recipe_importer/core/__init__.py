"""Core application components: configuration, errors, middleware, lifespan."""
