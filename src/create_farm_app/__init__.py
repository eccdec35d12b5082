"""create-farm-app: scaffold a FARM stack (FastAPI, React, MongoDB) project.

Copies a bundled template and runs the frontend, backend and git setup
steps as an ordered, short-circuiting task pipeline.
"""

from create_farm_app.version import __version__

__all__: list[str] = ["__version__"]
