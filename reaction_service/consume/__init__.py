"""Cascade consumer for resource-removed events.

Subscribes to the comment and video "remove.succeeded" topics and deletes
every reaction of the removed resources.

Usage:
    python -m reaction_service.consume                      # Use ./config.json
    python -m reaction_service.consume --config cfg.json    # Custom config
    python -m reaction_service.consume --debug              # Show debug info
"""
