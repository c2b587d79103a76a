from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

import requests

from foosbot.commands import COMMANDS


API_BASE = "https://slack.com/api"


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise SystemExit(f"Missing env var: {name}")
    return value


def _call(method: str, token: str, payload: dict[str, Any]) -> dict[str, Any]:
    resp = requests.post(
        f"{API_BASE}/{method}",
        headers={"Authorization": f"Bearer {token}"},
        data=payload,
        timeout=15,
    )
    if resp.status_code >= 300:
        raise RuntimeError(f"{method} failed: {resp.status_code} {resp.text}")
    body = resp.json()
    if not body.get("ok"):
        raise RuntimeError(f"{method} failed: {body.get('error')} {body.get('errors') or ''}".strip())
    return body


def build_commands(endpoint_url: str) -> list[dict[str, Any]]:
    # https://api.slack.com/reference/manifests#slash_commands
    return [
        {
            "command": command.value,
            "url": endpoint_url,
            "description": description,
            "should_escape": False,
        }
        for command, description in COMMANDS
    ]


def merge_manifest(manifest: dict[str, Any], endpoint_url: str) -> dict[str, Any]:
    merged = dict(manifest)
    features = dict(merged.get("features") or {})
    features["slash_commands"] = build_commands(endpoint_url)
    merged["features"] = features
    return merged


def main() -> int:
    parser = argparse.ArgumentParser(description="Register foosbot slash commands in the Slack app manifest.")
    parser.add_argument("--url", default=os.getenv("FOOSBOT_URL"), help="Public URL of the command endpoint.")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the command list and exit.")
    args = parser.parse_args()

    if not args.url:
        raise SystemExit("Missing --url (or FOOSBOT_URL)")

    commands = build_commands(args.url)
    if args.print_only:
        print(json.dumps(commands, indent=2))
        return 0

    token = _require_env("SLACK_CONFIG_TOKEN")
    app_id = _require_env("SLACK_APP_ID")

    try:
        exported = _call("apps.manifest.export", token, {"app_id": app_id})
        manifest = merge_manifest(exported.get("manifest") or {}, args.url)
        _call("apps.manifest.update", token, {"app_id": app_id, "manifest": json.dumps(manifest)})
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(f"Registered {len(commands)} commands (app:{app_id})")
    for cmd in commands:
        print(f"- {cmd['command']} -> {cmd['url']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
