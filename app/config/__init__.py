# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package holds the Django settings for the access and notification
# engine. There is no URL configuration or ASGI/WSGI application: route
# handlers live in the host service and call into the engine directly.
# =============================================================================
