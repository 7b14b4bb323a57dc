"""
Template access utilities for mirari.

Templates are bundled with the package and accessed via these utilities.
"""

from pathlib import Path

from mirari.errors import TemplateError


def get_templates_dir() -> Path:
    """
    Get the path to the templates directory.

    Returns:
        Path to the templates directory within the package.
    """
    return Path(__file__).parent


def get_obuild_templates_dir() -> Path:
    """
    Get the path to the obuild descriptor templates.

    Returns:
        Path to the obuild/ templates directory.
    """
    return get_templates_dir() / "obuild"


def read_template(name: str) -> str:
    """
    Read a bundled obuild template.

    Args:
        name: Template file name, e.g. 'main.obuild.template'.

    Returns:
        The template text.

    Raises:
        TemplateError: If the template is not bundled.
    """
    path = get_obuild_templates_dir() / name
    if not path.is_file():
        raise TemplateError(f"Template not found: {path}")
    return path.read_text(encoding="utf-8")
