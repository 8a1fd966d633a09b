# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information


import inspect
from datetime import date
from importlib import import_module
from typing import Dict, Optional

import neurofs

project = "neurofs"
author = "neurofs developers"
copyright = f"{date.today().year}, {author}"
release = neurofs.__version__
package = neurofs.__name__
gh_url = "https://github.com/neurofs/neurofs"

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

needs_sphinx = "5.0"
root_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosectionlabel",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx.ext.linkcode",
    "numpydoc",
    "sphinx_copybutton",
]

exclude_patterns = [
    "_build",
    "Thumbs.db",
    ".DS_Store",
]

templates_path = ["_templates"]

nitpicky = False
nitpick_ignore = []

# A list of ignored prefixes for module index sorting.
modindex_common_prefix = [f"{package}."]

default_role = "py:obj"

# -- Options for HTML output -------------------------------------------------
html_theme = "furo"
html_static_path = ["_static"]
html_title = project
html_show_sphinx = False

# -- autosummary -------------------------------------------------------------
autosummary_generate = False

# -- autodoc -----------------------------------------------------------------
autodoc_typehints = "none"
autodoc_member_order = "groupwise"
autodoc_warningiserror = True
autoclass_content = "class"

# -- intersphinx -------------------------------------------------------------
intersphinx_mapping = {
    "nibabel": ("https://nipy.org/nibabel/", None),
    "numpy": ("https://numpy.org/doc/stable", None),
    "python": ("https://docs.python.org/3", None),
}
intersphinx_timeout = 5

# -- autosectionlabels -------------------------------------------------------
autosectionlabel_prefix_document = True

# -- numpydoc ----------------------------------------------------------------
numpydoc_attributes_as_param_list = False  # dataclass fields → Attributes, not Parameters
numpydoc_show_class_members = False

# x-ref
numpydoc_xref_param_type = True
numpydoc_xref_aliases = {
    "bool": ":class:`python:bool`",
    "Path": "pathlib.Path",
    "Mesh": "neurofs.geometry.mesh.Mesh",
    "MeshStats": "neurofs.geometry.mesh.MeshStats",
    "Label": "neurofs.geometry.label_io.Label",
    "MghHeader": "neurofs.geometry.mgh_io.MghHeader",
    "MghVolume": "neurofs.geometry.mgh_io.MghVolume",
    "Compression": "neurofs.utils.types.Compression",
    "ExportFormat": "neurofs.utils.types.ExportFormat",
    "FormatError": "neurofs.errors.FormatError",
    "UnsupportedTypeError": "neurofs.errors.UnsupportedTypeError",
}

# validation
# https://numpydoc.readthedocs.io/en/latest/validation.html#validation-checks
error_ignores = {
    "GL01",  # docstring should start in the line immediately after the quotes
    "EX01",  # section 'Examples' not found
    "ES01",  # no extended summary found
    "SA01",  # section 'See Also' not found
    "RT02",  # The first line of the Returns section should contain only the type, unless multiple values are being returned  # noqa
}
numpydoc_validate = True
numpydoc_validation_checks = {"all"} | set(error_ignores)
numpydoc_validation_exclude = {  # regex to ignore during docstring check
    r"\.__len__",
    r"\.__repr__",
    r"\.__post_init__",
    # stdlib dataclasses re-exported into module scope
    r"\.dataclass$",
}

# -- sphinx.ext.linkcode -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/extensions/linkcode.html


def linkcode_resolve(domain: str, info: Dict[str, str]) -> Optional[str]:
    """Determine the URL corresponding to a Python object.

    Parameters
    ----------
    domain : str
        One of 'py', 'c', 'cpp', 'javascript'.
    info : dict
        With keys "module" and "fullname".

    Returns
    -------
    url : str | None
        The code URL. If None, no link is added.
    """
    if domain != "py":
        return None  # only document python objects

    # retrieve pyobject and file
    try:
        module = import_module(info["module"])
        pyobject = module
        for elt in info["fullname"].split("."):
            pyobject = getattr(pyobject, elt)
        fname = inspect.getsourcefile(pyobject).replace("\\", "/")
    except Exception:
        # Either the object could not be loaded or the file was not found.
        # For instance, properties will raise.
        return None

    source, start_line = inspect.getsourcelines(pyobject)
    lines = "L%d-L%d" % (start_line, start_line + len(source) - 1)

    if "dev" in release:
        branch = "main"
    else:
        return None
    fname = fname.rsplit(f"/{package}/")[1]
    return f"{gh_url}/blob/{branch}/{package}/{fname}#{lines}"
