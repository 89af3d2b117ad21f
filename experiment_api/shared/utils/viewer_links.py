"""Viewer page URL construction."""

from typing import Optional
from urllib.parse import urlencode

from experiment_api.constants.http import VIEWER_PAGE_PATH


def build_detail_url(
    frontend_base: str,
    api_base: str,
    session_id: Optional[str] = None,
    token: Optional[str] = None,
) -> str:
    """Build the viewer page URL for one session.

    A signed link carries the session inside the token, so ``session_id``
    is usually left out when ``token`` is given.

    Args:
        frontend_base: Origin serving the viewer page
        api_base: Origin of this API, passed to the page as ``api``
        session_id: Plain session identifier
        token: Signed link token

    Returns:
        str: The viewer URL
    """
    params = {}
    if session_id:
        params["sessionId"] = session_id
    params["api"] = api_base
    if token:
        params["token"] = token
    return f"{frontend_base.rstrip('/')}{VIEWER_PAGE_PATH}?{urlencode(params)}"
