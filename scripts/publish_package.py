#!/usr/bin/env python3
"""
Publish an APK to the catalog service.

Example:
    python scripts/publish_package.py \
        --server http://127.0.0.1:3001 \
        --username admin \
        --password admin123 \
        --apk build/maps-pro.apk \
        --version 1.0.3 \
        --category Navigation
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

import urllib.error
import urllib.request
import uuid

CATEGORIES = ["Entertainment", "Navigation", "Utilities", "Smart Home", "Diagnostics"]


def http_post_json(url: str, payload: dict[str, Any], headers: Optional[dict[str, str]] = None,
                   timeout: int = 30) -> tuple[int, bytes]:
    data = json.dumps(payload).encode("utf-8")
    req_headers = {"Content-Type": "application/json"}
    if headers:
        req_headers.update(headers)
    req = urllib.request.Request(url, data=data, headers=req_headers, method="POST")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read()


def build_multipart(fields: dict[str, str],
                    files: dict[str, tuple[str, bytes, str]]) -> tuple[bytes, str]:
    boundary = "----AutostoreBoundary" + uuid.uuid4().hex
    body = bytearray()

    def add_line(line: str) -> None:
        body.extend(line.encode("utf-8"))

    for name, value in fields.items():
        add_line(f"--{boundary}\r\n")
        add_line(f'Content-Disposition: form-data; name="{name}"\r\n\r\n')
        add_line(f"{value}\r\n")

    for name, (filename, content, content_type) in files.items():
        add_line(f"--{boundary}\r\n")
        add_line(
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n')
        add_line(f"Content-Type: {content_type}\r\n\r\n")
        body.extend(content)
        body.extend(b"\r\n")

    add_line(f"--{boundary}--\r\n")
    return bytes(body), f"multipart/form-data; boundary={boundary}"


def http_post_multipart(url: str,
                        fields: dict[str, str],
                        files: dict[str, tuple[str, bytes, str]],
                        headers: Optional[dict[str, str]] = None,
                        timeout: int = 120) -> tuple[int, bytes]:
    body, content_type = build_multipart(fields, files)
    req_headers = {"Content-Type": content_type}
    if headers:
        req_headers.update(headers)

    req = urllib.request.Request(url, data=body, headers=req_headers, method="POST")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read()


def login(server: str, username: str, password: str) -> dict[str, Any]:
    url = server.rstrip("/") + "/api/auth/login"
    print(f"[api] login {url}")
    status, body = http_post_json(url, {"username": username, "password": password}, timeout=15)
    if status != 200:
        raise SystemExit(f"login failed: {status} {body.decode(errors='ignore')}")
    return json.loads(body.decode("utf-8"))


def analyze(server: str, token: str, name: str, description: str) -> Optional[dict[str, Any]]:
    url = server.rstrip("/") + "/api/analysis"
    status, body = http_post_json(
        url,
        {"name": name, "description": description},
        headers={"Authorization": f"Bearer {token}"},
        timeout=60,
    )
    if status != 200:
        print(f"[api] analysis unavailable ({status})")
        return None
    return json.loads(body.decode("utf-8"))


def collect_fields(args: argparse.Namespace) -> dict[str, str]:
    fields: dict[str, str] = {"version": args.version}
    optional = {
        "name": args.name,
        "developer": args.developer,
        "category": args.category,
        "description": args.description,
        "size": args.size,
        "iconUrl": args.icon_url,
    }
    fields.update({key: value for key, value in optional.items() if value})
    return fields


def upload_package(server: str, token: str, apk: Path, fields: dict[str, str]) -> dict[str, Any]:
    url = server.rstrip("/") + "/api/apps/upload"
    print(f"[api] uploading {apk.name} to {url}")
    files = {"apk": (apk.name, apk.read_bytes(), "application/vnd.android.package-archive")}
    status, body = http_post_multipart(
        url,
        fields,
        files,
        headers={"Authorization": f"Bearer {token}"},
        timeout=120,
    )
    if status != 200:
        raise SystemExit(f"upload failed: {status} {body.decode(errors='ignore')}")
    return json.loads(body.decode("utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Upload an APK to the catalog service")
    parser.add_argument("--server", default="http://127.0.0.1:3001", help="Catalog service base URL")
    parser.add_argument("--username", default="admin", help="Login username")
    parser.add_argument("--password", default="admin123", help="Login password")
    parser.add_argument("--apk", required=True, type=Path, help="APK file to publish")
    parser.add_argument("--version", required=True, help="Version label shown in the catalog")
    parser.add_argument("--name", help="Display name (defaults to the file name)")
    parser.add_argument("--developer", help="Developer (defaults to the login user)")
    parser.add_argument("--category", choices=CATEGORIES, help="Catalog category")
    parser.add_argument("--description", help="Description text")
    parser.add_argument("--size", help="Display size (computed by the server when omitted)")
    parser.add_argument("--icon-url", help="Icon image URL")
    parser.add_argument("--analyze", action="store_true", help="Print the advisory safety report first")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if not args.apk.is_file():
        raise SystemExit(f"APK not found: {args.apk}")

    login_resp = login(args.server, args.username, args.password)
    token = login_resp.get("token")
    if not token:
        raise SystemExit("login response missing token")

    if args.analyze:
        report = analyze(args.server, token, args.name or args.apk.stem, args.description or "")
        if report:
            print(json.dumps(report, indent=2, ensure_ascii=False))

    upload_resp = upload_package(args.server, token, args.apk, collect_fields(args))

    print(f"[done] upload succeeded: {upload_resp.get('id')}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
