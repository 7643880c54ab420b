# Sphinx configuration for the SOP runtime API reference.

import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

from sop_runtime import __version__  # noqa: E402

project = "SOP Runtime"
author = "SOP Runtime contributors"
copyright = "2025, SOP Runtime contributors"
release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]

exclude_patterns = ["_build"]
html_theme = "sphinx_rtd_theme"

autodoc_member_order = "bysource"
autodoc_default_options = {
    "members": True,
    "exclude-members": "__weakref__, __init__, __new__",
}

# Docstrings use the Google "Raises:" section style.
napoleon_google_docstring = True
napoleon_numpy_docstring = False
