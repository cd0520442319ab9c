"""
Domain layer for email composition.

This layer contains:
- Value types (Address, Attachment, Priority)
- The Email aggregate and its deferred body rendering
- Result types (SendResponse for explicit success/failure handling)
- Capability contracts for renderers, senders and template sources
"""
