import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath(os.path.join(__file__, "..", "..", "..", "src")))

project = "tascli"
author = ""
release = "0.2.0"
copyright = f"{datetime.now().year}, {author}"  # noqa

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.autosectionlabel",
    "sphinx.ext.viewcode",
]

autosectionlabel_prefix_document = True
templates_path = ["_templates"]
exclude_patterns = []

root_doc = "index"

html_theme = "sphinx_rtd_theme"
