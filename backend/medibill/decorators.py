# Overview: Route protection decorators for pages and JSON endpoints.

from functools import wraps
from flask import current_app, g, jsonify, redirect, render_template, request, url_for

from .context import get_session_store
from .guards import GuardSpec, check_guard


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def _unauthenticated_response():
    if _wants_json():
        return jsonify({"error": "Authentication required"}), 401
    login_endpoint = current_app.config.get("LOGIN_ENDPOINT", "auth.login")
    return redirect(url_for(login_endpoint, next=request.path))


def _denied_response(principal, spec: GuardSpec):
    current_app.logger.info(
        "Access denied for principal %s (%s) on %s",
        principal.id,
        principal.role.value,
        request.path,
    )
    if _wants_json():
        body = {
            "error": "Permission denied",
            "message": "You don't have permission to access this resource.",
        }
        if spec.roles:
            body["required_roles"] = sorted(role.value for role in spec.roles)
        if spec.resource:
            body["required_resource"] = spec.resource
        if spec.resource and spec.action:
            body["required_action"] = spec.action
        return jsonify(body), 403

    # Rendered in place: the principal stays on the requested URL
    return render_template("access_denied.html"), 403


def login_required(f):
    """
    Require an authenticated principal.

    Sets g.principal to the principal snapshot used for this request.

    Returns:
    - redirect to the login page (pages) or 401 (JSON) when unauthenticated
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        principal = get_session_store().principal
        if principal is None:
            return _unauthenticated_response()

        g.principal = principal
        return f(*args, **kwargs)

    return decorated_function


def guard_required(spec: GuardSpec):
    """
    Require an authenticated principal that passes `spec`.

    Authentication is always checked first: an anonymous request is sent to
    login no matter what the spec contains. An authenticated principal that
    fails the spec gets the access denied page (403) at the same URL.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            principal = get_session_store().principal
            if principal is None:
                return _unauthenticated_response()

            if not check_guard(spec, principal):
                return _denied_response(principal, spec)

            g.principal = principal
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def role_required(*roles):
    """Require an authenticated principal holding any of `roles`."""
    return guard_required(GuardSpec(roles=roles))
