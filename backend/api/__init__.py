"""
API package - HTTP plumbing shared by all routes.

- middleware: request id, error envelopes, request logging
- serializers: success/error/search response envelopes
"""
