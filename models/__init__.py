"""
Author registry models.

`storage` is the process-wide DBStorage; call storage.reload() (create_app
does) before using its session.
"""
from models.db_storage import DBStorage

storage = DBStorage()
