"""Project scaffolding written before the first commit."""

from dataclasses import dataclass
from pathlib import Path

README_TEMPLATE = "# {name}\n\nCreated with Forjex\n"

GITIGNORE_TEMPLATES = {
    'Node': 'node_modules/\n.env\ndist/\n*.log\n',
    'Python': '__pycache__/\n*.py[cod]\n.env\nvenv/\n',
    'Java': '*.class\ntarget/\n.gradle/\nbuild/\n',
    'Go': 'bin/\n*.exe\n.env\n',
    'Rust': 'target/\nCargo.lock\n',
}


@dataclass
class ScaffoldOptions:
    readme: bool = False
    gitignore: str | None = None  # Key of GITIGNORE_TEMPLATES
    project_name: str = "Project"


def write_project_files(root: Path, options: ScaffoldOptions) -> list[Path]:
    """Create missing project files. Existing files are never overwritten.

    Returns the paths that were written.
    """
    written = []

    readme = root / 'README.md'
    if options.readme and not readme.exists():
        readme.write_text(README_TEMPLATE.format(name=options.project_name), encoding='utf-8')
        written.append(readme)

    template = GITIGNORE_TEMPLATES.get(options.gitignore or '')
    gitignore = root / '.gitignore'
    if template and not gitignore.exists():
        gitignore.write_text(template, encoding='utf-8')
        written.append(gitignore)

    return written
