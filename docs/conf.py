# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Sphinx configuration for genro-cloudinary documentation."""

import sys
from pathlib import Path

# autodoc imports genro_cloudinary from src/
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Version comes from pyproject.toml
try:
    import tomllib

    with open(Path(__file__).parent.parent / "pyproject.toml", "rb") as f:
        release = tomllib.load(f)["project"]["version"]
except Exception:
    release = "0.0.0"
version = ".".join(release.split(".")[:2])

project = "Genro Cloudinary"
copyright = "2025, Softwell S.r.l."
author = "Softwell S.r.l."

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",  # Google style docstrings
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
    "myst_parser",  # Markdown pages
]

myst_enable_extensions = ["colon_fence", "deflist"]
myst_heading_anchors = 3

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
master_doc = "index"
exclude_patterns = ["_build", ".DS_Store"]

html_theme = "sphinx_rtd_theme"
html_theme_options = {
    "navigation_depth": 3,
    "collapse_navigation": False,
}
html_static_path = ["_static"]
html_title = project
html_context = {
    "display_github": True,
    "github_user": "genropy",
    "github_repo": "genro-cloudinary",
    "github_version": "main",
    "conf_py_path": "/docs/",
}

autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "special-members": "__init__",
    "show-inheritance": True,
}
autodoc_typehints = "description"
autodoc_typehints_description_target = "documented"

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_attr_annotations = True

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "httpx": ("https://www.python-httpx.org", None),
    "click": ("https://click.palletsprojects.com/en/stable", None),
}

typehints_fully_qualified = False
always_document_param_types = True
