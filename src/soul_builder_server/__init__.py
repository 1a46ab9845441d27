"""soul_builder_server: FastAPI service for the Soul Builder SDK.

Exposes the SoulBuilderEngine over HTTP: REST session endpoints, a
tool-call endpoint mirroring the four Soul Builder tools, an admin sweep
endpoint, and health/info endpoints.
"""
