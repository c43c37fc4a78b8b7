# Overview: Login/logout pages and the JSON view of the current session.

"""
Authentication routes

- GET/POST /login       sign in through the remote authentication service
- POST /logout          drop the current principal
- GET /api/auth/session context surface for scripts and the front end

Only AuthenticationError reaches the user as a message. Anything unexpected
is logged and answered with a generic failure.
"""

from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for

from ..context import get_session_store
from ..permissions import grants_for
from ..services import authorization_service
from ..services.auth_service import AuthenticationError, Credentials


auth_bp = Blueprint("auth", __name__)


def _safe_next(value: str | None) -> str:
    """Only same-site absolute paths are honored as post-login targets."""
    if value and value.startswith("/") and not value.startswith("//") and "\\" not in value:
        return value
    return url_for("shell.dashboard")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    store = get_session_store()
    next_url = _safe_next(request.values.get("next"))

    if request.method == "GET":
        if store.is_authenticated:
            return redirect(next_url)
        return render_template("auth/login.html", next_url=next_url)

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""
    branch_id = (request.form.get("branch") or "").strip() or None

    if not username or not password:
        return render_template(
            "auth/login.html",
            next_url=next_url,
            username=username,
            error="Username and password are required",
        ), 400

    try:
        principal = store.sign_in(Credentials(username=username, password=password, branch_id=branch_id))
    except AuthenticationError as e:
        return render_template(
            "auth/login.html",
            next_url=next_url,
            username=username,
            error=e.message,
        ), 401
    except Exception:
        current_app.logger.exception("Failed to login user")
        return render_template(
            "auth/login.html",
            next_url=next_url,
            username=username,
            error="Login failed. Please try again.",
        ), 500

    if principal is None:
        # A later login/logout won the race; its outcome stands
        return render_template(
            "auth/login.html",
            next_url=next_url,
            username=username,
            error="Sign-in was superseded by another session change. Please try again.",
        ), 409

    return redirect(next_url)


@auth_bp.post("/logout")
def logout():
    try:
        get_session_store().logout()
    except Exception:
        current_app.logger.exception("Failed to logout user")
        return render_template("auth/login.html", next_url=url_for("shell.dashboard"),
                               error="Logout failed. Please try again."), 500

    return redirect(url_for("auth.login"))


@auth_bp.get("/api/auth/session")
def session_route():
    """
    Current session as JSON.

    Unauthenticated requests get is_authenticated=false rather than 401: the
    answer itself is the information asked for.
    """
    principal = get_session_store().principal

    grants = {}
    if principal is not None:
        grants = {
            resource: sorted(actions)
            for resource, actions in sorted(grants_for(principal.role).items())
        }

    return jsonify({
        "is_authenticated": principal is not None,
        "principal": principal.to_dict() if principal else None,
        "resources": sorted(grants),
        "grants": grants,
        **authorization_service.role_flags(principal),
    }), 200
