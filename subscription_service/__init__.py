"""HTTP service for tracking users' subscriptions to online services."""
