"""
NomadLife — Community Website & Game-Server Integration API
=============================================================
Serves the blog, Discord events, team rosters, player mappings and player
statistics for the NomadLife community website.  Writes come from two
places: the admin panel (admin token) and the Discord bot / Minecraft mod
(shared bot secret).

Package layout::

    nomadlife/
    ├── config.py          # env + YAML → typed Python config
    ├── constants.py       # Collection names, defaults
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + session helper
    │   └── models.py      # The generic ``documents`` table
    ├── storage/
    │   ├── base.py        # StorageBackend contract + StorageError
    │   ├── local.py       # Filesystem backend
    │   ├── blob.py        # S3-compatible object storage backend
    │   ├── sql.py         # Relational backend
    │   └── factory.py     # Pick a backend from config
    ├── services/
    │   ├── document_store.py  # JSON documents over any backend
    │   ├── config_store.py    # Singleton admin config (password hash)
    │   ├── auth.py            # Admin token / bot secret checks
    │   └── *_service.py       # Per-resource shaping (blog, events, …)
    └── api/
        ├── main.py        # FastAPI app (+ Mangum handler)
        ├── deps.py        # Dependency injection
        ├── responses.py   # {success, message} envelope + error handlers
        └── routes/        # One router per resource
"""

__version__ = "0.1.0"
