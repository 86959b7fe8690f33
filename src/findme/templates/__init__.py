"""Output template management for the screen."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

# Set up Jinja2 environment for output templates
TEMPLATES_DIR = Path(__file__).parent
OUTPUT_TEMPLATES_DIR = TEMPLATES_DIR / "outputs"

output_env = Environment(
    loader=FileSystemLoader(OUTPUT_TEMPLATES_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_degrees(value: float | None) -> str:
    """Coordinates as plain decimal degrees."""
    if value is None:
        return ""
    return repr(float(value))


output_env.filters["degrees"] = format_degrees


def render_output(view_name: str, **context) -> str:
    """
    Render an output template for part of the screen.

    Args:
        view_name: Name of the view (e.g., 'panel', 'map')
        **context: Variables to pass to the template

    Returns:
        Rendered output string

    Raises:
        jinja2.TemplateNotFound: If the template doesn't exist (this is fatal)
    """
    template_name = f"{view_name}_output.j2"
    template = output_env.get_template(template_name)
    return template.render(**context).rstrip("\n")
