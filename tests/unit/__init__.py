"""
Unit tests for the Box Image Classification Service.

Test individual components in isolation:
- Data models (status codes, messages, shape, settings)
- Signature resolution and the Classify contract
- HTTP inference backend (httpx.MockTransport)
- API error mapping and dependencies
- gRPC status mapping and message codec
"""
