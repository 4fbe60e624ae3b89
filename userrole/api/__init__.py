"""HTTP boundary: routers and middleware."""
