from __future__ import annotations

from functools import wraps

from flask import flash, redirect, request, url_for

from ..core.constants import MSG_LOGIN_REQUIRED
from .guard import Outcome, decide
from .session import AuthSession


def guarded(auth: AuthSession):
    """Run the navigation gate for ``request.endpoint`` before the view.

    Denied views redirect silently to the role's home view; unauthenticated
    requests go to the login view.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = decide(auth, request.endpoint)
            if decision.outcome is Outcome.LOGIN:
                flash(MSG_LOGIN_REQUIRED, "warning")
                return redirect(url_for(decision.endpoint))
            if decision.outcome is Outcome.REDIRECT:
                return redirect(url_for(decision.endpoint))
            return view(*args, **kwargs)

        return wrapper

    return decorator
