"""In-process publish/subscribe channel for confirmed entity changes."""

from .bus import EventBus, Subscription, SubscriptionGroup, Topic, data_hub

__all__ = ["EventBus", "Subscription", "SubscriptionGroup", "Topic", "data_hub"]
