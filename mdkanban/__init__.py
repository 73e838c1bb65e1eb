# Markdown kanban backend: boards, lanes and cards stored as plain files
#
# Components:
#   config.py     - Immutable runtime configuration (YAML + environment)
#   errors.py     - Error taxonomy shared by every component
#   paths.py      - Logical path resolution, rename sanitizing, atomic writes
#   jsonmap.py    - JSON object file used as a path -> value map (tags, sort)
#   schema.py     - Data model (Lane, Card)
#   board.py      - Board enumeration into lanes of cards
#   resources.py  - Create / rename / rewrite / delete of board entries
#   images.py     - Random-id image blob storage
#   watcher.py    - Polling change detector for the tasks root
#   commands.py   - KanbanService and the COMMAND_TABLE dispatch surface

__version__ = "0.3.0"
