"""Order status notification service.

Persists notifications for order lifecycle events and pushes them to live
client sessions, with an optional email side channel.
"""
