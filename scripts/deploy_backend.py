#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import re
import shlex
import subprocess
import sys


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise SystemExit(f"Missing env var: {name}")
    return value


def _optional_env(name: str) -> str | None:
    return os.environ.get(name) or None


def redact(cmd: list[str], keys: set[str]) -> list[str]:
    display = []
    for token in cmd:
        if any(token.startswith(f"{k}=") for k in keys):
            display.append(f"{token.split('=', 1)[0]}=***")
        else:
            display.append(token)
    return display


def _run(cmd: list[str], *, cwd: str | None = None, secret_keys: set[str] | None = None, dry_run: bool = False) -> None:
    print(f"+ {shlex.join(redact(cmd, secret_keys or set()))}", flush=True)
    if not dry_run:
        subprocess.run(cmd, cwd=cwd, check=True)


def _stack_outputs(stack_name: str, region: str) -> dict[str, str]:
    try:
        proc = subprocess.run(
            [
                "aws",
                "cloudformation",
                "describe-stacks",
                "--stack-name",
                stack_name,
                "--region",
                region,
                "--query",
                "Stacks[0].Outputs",
                "--output",
                "json",
            ],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        print(f"NOTE: Failed to read stack outputs: {exc}", file=sys.stderr)
        return {}

    try:
        outputs = json.loads(proc.stdout or "[]") or []
    except json.JSONDecodeError:
        print("NOTE: Failed to parse stack outputs JSON", file=sys.stderr)
        return {}
    return {o["OutputKey"]: o["OutputValue"] for o in outputs if o.get("OutputKey") and o.get("OutputValue")}


_SEMVER_RE = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


def next_build_version(current_version: str | None) -> str:
    """Bump the patch number of ``current_version``, starting over at 0.1.1."""
    first = "0.1.1"
    if not current_version:
        return first
    m = _SEMVER_RE.match(current_version.strip())
    if not m:
        return first
    return f"{m.group('major')}.{m.group('minor')}.{int(m.group('patch')) + 1}"


def build_deploy_command(
    *,
    stack_name: str,
    region: str,
    signing_secret: str,
    max_request_age: str,
    build_version: str,
) -> list[str]:
    return [
        "sam",
        "deploy",
        "--template-file",
        "template.yaml",
        "--stack-name",
        stack_name,
        "--region",
        region,
        "--resolve-s3",
        "--capabilities",
        "CAPABILITY_IAM",
        "--no-confirm-changeset",
        "--no-fail-on-empty-changeset",
        "--parameter-overrides",
        f"SlackSigningSecret={signing_secret}",
        f"SlackMaxRequestAge={max_request_age}",
        f"BackendBuildVersion={build_version}",
    ]


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Deploy the foosbot SAM stack without --guided prompts (redacts secrets in logs)."
    )
    parser.add_argument("--stack-name", default="foosbot")
    parser.add_argument("--region", default=_optional_env("AWS_REGION") or _optional_env("AWS_DEFAULT_REGION") or "us-east-1")
    parser.add_argument("--skip-build", action="store_true", help="Skip `sam build`.")
    parser.add_argument("--dry-run", action="store_true", help="Print commands only; do not execute.")
    args = parser.parse_args()

    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

    signing_secret = _require_env("SLACK_SIGNING_SECRET")
    max_request_age = _optional_env("SLACK_MAX_REQUEST_AGE") or "0"
    build_version = _optional_env("BACKEND_BUILD_VERSION")
    if not build_version:
        current = _stack_outputs(args.stack_name, args.region).get("BackendBuildVersion")
        build_version = next_build_version(current)

    if args.dry_run:
        print("DRY RUN: no commands will be executed.\n")

    if not args.skip_build:
        _run(["sam", "build", "--template-file", "template.yaml"], cwd=repo_root, dry_run=args.dry_run)

    deploy_cmd = build_deploy_command(
        stack_name=args.stack_name,
        region=args.region,
        signing_secret=signing_secret,
        max_request_age=max_request_age,
        build_version=build_version,
    )
    _run(deploy_cmd, cwd=repo_root, secret_keys={"SlackSigningSecret"}, dry_run=args.dry_run)
    if args.dry_run:
        return 0

    outputs = _stack_outputs(args.stack_name, args.region)
    if outputs:
        print("\nStack outputs:")
        for key, value in outputs.items():
            print(f"- {key}: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
