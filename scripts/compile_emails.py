#!/usr/bin/env python3
"""Compile email templates by inlining CSS and minifying HTML.

Processes the Jinja2 sources under wikiadmin/templates/emails and writes the
results to its compiled/ subdirectory, which is what the app renders.

Run this script after modifying email templates:
    python scripts/compile_emails.py
"""

from pathlib import Path

import css_inline
import minify_html
from jinja2 import Environment, FileSystemLoader, select_autoescape

project_root = Path(__file__).parent.parent

# Template name -> Jinja2 variables it uses
TEMPLATES = {
    "invitation.j2": ["app_title", "email", "password", "site_url"],
}

# URL-shaped markers keep the minifier from dropping attribute quotes.
MARKER_URL_PREFIX = "https://jinja-placeholder.local/var/"


def restore_variables(html_content: str, variables: list[str]) -> str:
    """Swap placeholder markers back to ``{{ var }}`` expressions."""
    for var in variables:
        marker = f"{MARKER_URL_PREFIX}{var}"
        jinja_var = f"{{{{ {var} }}}}"
        # The minifier may strip quotes around attribute values.
        html_content = html_content.replace(f"={marker}>", f'="{jinja_var}">')
        html_content = html_content.replace(f"={marker} ", f'="{jinja_var}" ')
        html_content = html_content.replace(f'"{marker}"', f'"{jinja_var}"')
        html_content = html_content.replace(marker, jinja_var)
    return html_content


def compile_template(
    env: Environment,
    template_name: str,
    variables: list[str],
    output_dir: Path,
) -> Path:
    context = {var: f"{MARKER_URL_PREFIX}{var}" for var in variables}
    html_content = env.get_template(template_name).render(**context)

    html_content = css_inline.inline(html_content)
    html_content = minify_html.minify(html_content, minify_css=True)
    html_content = restore_variables(html_content, variables)

    output_path = output_dir / (Path(template_name).stem + ".html")
    output_path.write_text(html_content, encoding="utf-8")
    return output_path


def main() -> None:
    templates_dir = project_root / "wikiadmin" / "templates" / "emails"
    output_dir = templates_dir / "compiled"
    output_dir.mkdir(exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )

    print("Compiling email templates...")
    for template_name, variables in TEMPLATES.items():
        if not (templates_dir / template_name).exists():
            print(f"  ✗ {template_name} (not found)")
            continue
        output_path = compile_template(env, template_name, variables, output_dir)
        print(f"  ✓ {template_name} -> {output_path.name}")

    print(f"\nCompiled templates saved to: {output_dir}")


if __name__ == "__main__":
    main()
