#!/usr/bin/env python3
"""
Request a signed external link for one session and print the viewer URL.

Usage:
    python scripts/sign_link.py --session D615030F4886915F8327D59DD37C30FE
    python scripts/sign_link.py --session S1 --exp-sec 600 --api-base http://192.168.0.17:4000
    python scripts/sign_link.py --session S1 --plain  # link without a token
"""

import argparse
import os
import sys

import requests
from dotenv import load_dotenv

from experiment_api.shared.utils.viewer_links import build_detail_url

load_dotenv()


def request_token(api_base: str, api_prefix: str, session_id: str, user_id: str, exp_sec: int, timeout: int) -> str:
    """Call the signing endpoint and return the token."""
    url = f"{api_base}{api_prefix}/links/sign"
    body = {"sessionId": session_id, "expSec": exp_sec}
    if user_id:
        body["userId"] = user_id

    response = requests.post(url, json=body, timeout=timeout)
    if response.status_code != 200:
        message = response.json().get("message", response.text) if response.content else response.reason
        raise RuntimeError(f"Signing failed (HTTP {response.status_code}): {message}")
    return response.json()["token"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a viewer link for an experiment session")
    parser.add_argument("--session", required=True, help="Session identifier")
    parser.add_argument("--user", default="", help="Optional user identifier embedded in the token")
    parser.add_argument("--exp-sec", type=int, default=int(os.getenv("EXP_SEC", "300")), help="Token lifetime in seconds")
    parser.add_argument("--api-base", default=os.getenv("API_BASE", "http://localhost:4000"), help="API origin")
    parser.add_argument("--api-prefix", default=os.getenv("API_PREFIX", "/api"), help="API route prefix")
    parser.add_argument("--frontend-base", default=os.getenv("FRONTEND_BASE", "http://localhost:3000"), help="Viewer origin")
    parser.add_argument("--plain", action="store_true", help="Put the session id in the link instead of a token")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    args = parser.parse_args()

    api_base = args.api_base.rstrip("/")

    if args.plain:
        print(build_detail_url(args.frontend_base, api_base, session_id=args.session))
        return 0

    try:
        token = request_token(api_base, args.api_prefix, args.session, args.user, args.exp_sec, args.timeout)
    except (requests.RequestException, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(build_detail_url(args.frontend_base, api_base, token=token))
    return 0


if __name__ == "__main__":
    sys.exit(main())
