"""Package initializer for `app`.

The FastAPI instance lives in the top-level `app.py` file. This module loads
that file explicitly from the project root and exposes its `app` symbol, so
`from app import app` works even though there is a package named `app`.
"""
from importlib import util
import os
import sys

_root = os.path.dirname(os.path.dirname(__file__))
_app_py = os.path.join(_root, "app.py")

if os.path.exists(_app_py):
	spec = util.spec_from_file_location("_announcer_app_module", _app_py)
	module = util.module_from_spec(spec)
	sys.modules[spec.name] = module
	spec.loader.exec_module(module)
	app = getattr(module, "app", None)
else:
	app = None

__all__ = ["app"]
