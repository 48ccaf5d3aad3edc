"""Core application plumbing: config, logging, errors, extensions."""
