# Overview: Access to the app-owned session store and the template helpers built on it.

from flask import current_app, g

from . import guards
from .guards import check_guard, guard_spec
from .navigation import visible_tree
from .services import authorization_service


def get_session_store():
    """The SessionStore owned by the current application."""
    return current_app.extensions["medibill"]["session_store"]


def get_navigation():
    return current_app.extensions["medibill"]["navigation"]


def current_principal():
    """Principal snapshot for this request (pinned by the route decorators)."""
    if "principal" in g:
        return g.principal
    return get_session_store().principal


def register_template_helpers(app):
    """Expose guard checks and the filtered sidebar to every template."""

    @app.context_processor
    def inject_auth_context():
        principal = current_principal()

        def template_check_guard(spec=None, **kwargs):
            return check_guard(guard_spec(spec, **kwargs), principal)

        def template_has_role(*roles):
            return authorization_service.has_role(principal, roles)

        def template_has_permission(resource, action):
            return authorization_service.has_permission(principal, resource, action)

        def template_can_access(resource):
            return authorization_service.can_access(principal, resource)

        return {
            "current_principal": principal,
            "is_authenticated": principal is not None,
            "navigation": visible_tree(get_navigation(), principal),
            "role_flags": authorization_service.role_flags(principal),
            "check_guard": template_check_guard,
            "has_role": template_has_role,
            "has_permission": template_has_permission,
            "can_access": template_can_access,
            "guards": guards,
        }
