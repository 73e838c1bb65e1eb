#!/usr/bin/env python3
"""
mdkanban command host for the desktop shell

Runs commands from COMMAND_TABLE and prints JSON. Logs go to stderr so
stdout carries nothing but JSON.

Usage:
    python -m mdkanban invoke get_resource --params '{"path": "work"}'
    python -m mdkanban serve                # JSON-lines requests on stdin
    python -m mdkanban watch                # print files-changed events
    python -m mdkanban --tasks-dir ~/notes/tasks --title "My board" serve

serve protocol (one JSON object per line):
    in:   {"id": 1, "command": "get_tags", "params": {"path": "work/todo"}}
    out:  {"id": 1, "result": {...}}   or   {"id": 1, "error": "..."}
    out:  {"event": "files-changed"}   (after start_file_watcher)

Bytes travel as base64: "fileData" for upload_image, the result of get_image.
"""

import argparse
import base64
import json
import logging
import sys
import threading
from typing import Any, Dict, Optional, TextIO

from .commands import KanbanService, dispatch
from .config import AppConfig
from .errors import ConfigError, InvalidParams, KanbanError
from .watcher import WatchHandle

logger = logging.getLogger("mdkanban")

_out_lock = threading.Lock()


def _write_line(out: TextIO, payload: Dict[str, Any]) -> None:
    line = json.dumps(payload, ensure_ascii=False)
    with _out_lock:
        out.write(line + "\n")
        out.flush()


def _decode_params(command: str, params: Dict[str, Any]) -> Dict[str, Any]:
    """Turn base64 upload payloads back into bytes."""
    if command != "upload_image":
        return params
    params = dict(params)
    for key in ("file_data", "fileData"):
        value = params.get(key)
        if isinstance(value, str):
            try:
                params[key] = base64.b64decode(value, validate=True)
            except ValueError as e:
                raise InvalidParams(f"{key} is not valid base64: {e}") from e
        elif isinstance(value, list):
            # Plain byte array, as the web front end sends it
            try:
                params[key] = bytes(value)
            except (TypeError, ValueError) as e:
                raise InvalidParams(f"{key} is not a byte array: {e}") from e
    return params


def _encode_result(result: Any) -> Any:
    if isinstance(result, bytes):
        return base64.b64encode(result).decode("ascii")
    if isinstance(result, WatchHandle):
        return None
    return result


def run_command(service: KanbanService, command: str, params: Optional[Dict[str, Any]]) -> Any:
    """dispatch() with the serve/invoke wire encoding applied."""
    if params is not None and not isinstance(params, dict):
        raise InvalidParams("params must be a JSON object")
    result = dispatch(service, command, _decode_params(command, params or {}))
    return _encode_result(result)


def handle_request(service: KanbanService, line: str) -> Dict[str, Any]:
    """Process one serve request line and build the response object."""
    try:
        request = json.loads(line)
    except json.JSONDecodeError as e:
        return {"id": None, "error": f"invalid json: {e}"}
    if not isinstance(request, dict):
        return {"id": None, "error": "request must be a JSON object"}

    req_id = request.get("id")
    command = request.get("command")
    try:
        result = run_command(service, command, request.get("params"))
    except KanbanError as e:
        logger.warning(f"{command} failed: {e}")
        return {"id": req_id, "error": str(e)}
    except Exception as e:
        logger.exception(f"Unexpected error in {command}: {e}")
        return {"id": req_id, "error": f"internal error: {e}"}
    return {"id": req_id, "result": result}


# ── Subcommands ────────────────────────────────────────────────────────────

def cmd_invoke(service: KanbanService, args, out: TextIO) -> int:
    try:
        params = json.loads(args.params) if args.params else {}
        result = run_command(service, args.command, params)
    except json.JSONDecodeError as e:
        _write_line(out, {"error": f"invalid --params: {e}"})
        return 1
    except KanbanError as e:
        _write_line(out, {"error": str(e)})
        return 1
    _write_line(out, {"result": result})
    return 0


def cmd_serve(service: KanbanService, args, out: TextIO, stdin: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    service.watcher.subscribe(lambda event: _write_line(out, {"event": event}))
    logger.info(f"Serving commands on stdin (tasks: {service.config.tasks_dir})")
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        _write_line(out, handle_request(service, line))
    return 0


def cmd_watch(service: KanbanService, args, out: TextIO) -> int:
    service.watcher.subscribe(lambda event: _write_line(out, {"event": event}))
    handle = service.start_file_watcher()
    try:
        while handle.active:
            handle.join(timeout=1)
    except KeyboardInterrupt:
        logger.info("Stopping...")
        handle.cancel()
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mdkanban",
        description="Markdown kanban backend: boards, tags, sort order, images",
    )
    ap.add_argument("--config", default=None, help="Path to config.yaml")
    ap.add_argument("--config-dir", default=None, help="Directory for tags.json, sort.json, images/")
    ap.add_argument("--tasks-dir", default=None, help="Root directory holding the boards")
    ap.add_argument("--title", default=None, help="Display title")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")

    sub = ap.add_subparsers(dest="action", required=True)

    inv = sub.add_parser("invoke", help="Run a single command and print the result")
    inv.add_argument("command", help="Command name, e.g. get_resource")
    inv.add_argument("--params", default=None, help="JSON object of command parameters")

    sub.add_parser("serve", help="Read JSON-lines requests from stdin")
    sub.add_parser("watch", help="Print a line for every files-changed event")
    return ap


def main(argv=None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)

    try:
        cfg = AppConfig.load(
            args.config,
            config_dir=args.config_dir,
            tasks_dir=args.tasks_dir,
            title=args.title,
            log_level=args.log_level,
        )
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    service = KanbanService(cfg)
    if args.action == "invoke":
        return cmd_invoke(service, args, out)
    if args.action == "serve":
        return cmd_serve(service, args, out)
    return cmd_watch(service, args, out)


if __name__ == "__main__":
    sys.exit(main())
