"""Echo endpoint for JSON task requests."""
