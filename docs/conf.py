# Sphinx configuration for the unitproduct docs.
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# autodoc imports the package from the source tree
sys.path.insert(0, os.path.abspath(os.path.join("..", "src")))

project = 'unitproduct'
copyright = '2025, Parneet Sidhu'
author = 'Parneet Sidhu'
html_title = 'unitproduct'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    "myst_parser",
]

autodoc_member_order = "bysource"
napoleon_numpy_docstring = True

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = "furo"
html_theme_options = {
    "navigation_with_keys": True,
    "source_repository": "https://github.com/parneetsingh022/unitproduct",
    "source_branch": "main",
    "source_directory": "docs/",
}

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
