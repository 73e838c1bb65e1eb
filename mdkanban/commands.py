"""
Command surface for the desktop shell.

KanbanService owns one instance of each component, built from an AppConfig.
COMMAND_TABLE is the fixed list of operations the shell may call; dispatch()
looks a name up there and calls the handler with the request params.
No dynamic dispatch beyond this table.
"""
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from .board import BoardTree
from .config import AppConfig
from .errors import InvalidParams, UnknownCommand
from .images import ImageStore
from .jsonmap import JsonMapStore
from .resources import ResourceMutator
from .watcher import ChangeWatcher, WatchHandle

logger = logging.getLogger(__name__)

TAGS_FILE = "tags.json"
SORT_FILE = "sort.json"


class KanbanService:
    """The operations exposed to the front end."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.tags = JsonMapStore(config.config_path / TAGS_FILE)
        self.sort = JsonMapStore(config.config_path / SORT_FILE)
        self.board = BoardTree(config.tasks_path)
        self.resources = ResourceMutator(config.tasks_path)
        self.images = ImageStore(config.config_path)
        self.watcher = ChangeWatcher(config.tasks_path, interval=config.poll_interval)

    # ── Tags ────────────────────────────────────────────────

    def get_tags(self, path: str) -> Any:
        return self.tags.get(path)

    def update_tag_background_color(self, path: str, colors: Any) -> None:
        self.tags.set(path, colors)

    # ── Title ───────────────────────────────────────────────

    def get_title(self) -> str:
        return self.config.title

    # ── Resources ───────────────────────────────────────────

    def get_resource(self, path: str) -> List[Dict[str, Any]]:
        return [lane.to_dict() for lane in self.board.list_board(path)]

    def create_resource(
        self, path: str, is_file: Optional[bool] = None, content: Optional[str] = None
    ) -> None:
        self.resources.create(path, is_file=bool(is_file), content=content)

    def update_resource(
        self, path: str, new_path: Optional[str] = None, content: Optional[str] = None
    ) -> None:
        self.resources.update(path, new_path=new_path, content=content)

    def delete_resource(self, path: str) -> None:
        self.resources.delete(path)

    # ── Images ──────────────────────────────────────────────

    def upload_image(self, file_data: bytes, filename: str) -> str:
        return self.images.upload(bytes(file_data), filename)

    def get_image(self, filename: str) -> bytes:
        return self.images.fetch(filename)

    # ── Sort ────────────────────────────────────────────────

    def update_sort(self, path: str, sort_data: Any) -> None:
        self.sort.set(path, sort_data)

    def get_sort(self, path: str) -> Any:
        return self.sort.get(path)

    # ── Watcher ─────────────────────────────────────────────

    def start_file_watcher(self) -> WatchHandle:
        return self.watcher.start()


# Front-end (camelCase) parameter names -> handler keyword names
PARAM_ALIASES = {
    "isFile": "is_file",
    "newPath": "new_path",
    "sortData": "sort_data",
    "fileData": "file_data",
}

# Handler keyword -> accepted value types
PARAM_TYPES = {
    "path": (str,),
    "filename": (str,),
    "new_path": (str, type(None)),
    "content": (str, type(None)),
    "is_file": (bool, type(None)),
}


def check_param_types(command: str, kwargs: Dict[str, Any]) -> None:
    """Raise InvalidParams for a value of the wrong JSON type."""
    for key, value in kwargs.items():
        expected = PARAM_TYPES.get(key)
        if expected is not None and not isinstance(value, expected):
            raise InvalidParams(
                f"Bad parameters for {command}: {key} must be "
                f"{' or '.join(t.__name__ for t in expected)}, got {type(value).__name__}"
            )
    if "file_data" in kwargs:
        data = kwargs["file_data"]
        if isinstance(data, (bytes, bytearray)):
            return
        if isinstance(data, list) and all(
            isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in data
        ):
            return
        raise InvalidParams(f"Bad parameters for {command}: file_data must be bytes")


COMMAND_TABLE: Dict[str, Callable[..., Any]] = {
    "get_tags": KanbanService.get_tags,
    "update_tag_background_color": KanbanService.update_tag_background_color,
    "get_title": KanbanService.get_title,
    "get_resource": KanbanService.get_resource,
    "create_resource": KanbanService.create_resource,
    "update_resource": KanbanService.update_resource,
    "delete_resource": KanbanService.delete_resource,
    "upload_image": KanbanService.upload_image,
    "get_image": KanbanService.get_image,
    "update_sort": KanbanService.update_sort,
    "get_sort": KanbanService.get_sort,
    "start_file_watcher": KanbanService.start_file_watcher,
}


def normalize_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {PARAM_ALIASES.get(k, k): v for k, v in (params or {}).items()}


def dispatch(service: KanbanService, command: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """Run one command from COMMAND_TABLE. Unknown names raise UnknownCommand."""
    handler = COMMAND_TABLE.get(command) if isinstance(command, str) else None
    if handler is None:
        logger.warning(f"Rejected unknown command: {command}")
        raise UnknownCommand(f"Unknown command: {command}")

    kwargs = normalize_params(params)
    try:
        inspect.signature(handler).bind(service, **kwargs)
    except TypeError as e:
        raise InvalidParams(f"Bad parameters for {command}: {e}") from e
    check_param_types(command, kwargs)

    logger.debug(f"Dispatching {command} {sorted(kwargs)}")
    return handler(service, **kwargs)
