"""
Prompt templates - str.format() templates shipped under prompts/.

    prompts/world_generation/   set_in, based_on, original, naming, response_format
    prompts/world_analysis/     suggestions

Literal braces in the JSON examples are doubled ({{ and }}). Templates are
read on first use and re-read when the file changes, so wording can be tuned
without restarting a long-lived process.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent / "prompts"


@dataclass
class _Template:
    text: str
    mtime: float


class PromptLoader:
    """Serves prompt templates by category and file name.

    A template whose file disappears keeps serving the last text read.
    """

    def __init__(self, prompts_dir: Path | None = None):
        self.prompts_dir = Path(prompts_dir or PROMPTS_DIR)
        self._templates: dict[tuple[str, str], _Template] = {}
        if not self.prompts_dir.is_dir():
            logger.warning(f"Prompt directory not found: {self.prompts_dir}")

    def get_prompt(self, category: str, name: str, reload: bool = False) -> str:
        """
        Return the raw template text.

        Args:
            category: Subdirectory under the prompts directory
            name: Template file name, e.g. 'set_in.txt'
            reload: Re-read the file even if it has not changed

        Raises:
            FileNotFoundError: If the file is missing and was never read
        """
        key = (category, name)
        path = self.prompts_dir / category / name
        cached = self._templates.get(key)

        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            if cached is None:
                raise FileNotFoundError(
                    f"No prompt template {category}/{name} under {self.prompts_dir}"
                ) from None
            logger.warning(f"Template {category}/{name} was removed, serving cached copy")
            return cached.text

        if reload or cached is None or mtime > cached.mtime:
            if cached is not None:
                logger.info(f"Reloading changed template: {category}/{name}")
            cached = _Template(text=path.read_text(encoding="utf-8"), mtime=mtime)
            self._templates[key] = cached
        return cached.text

    def render(self, category: str, name: str, **fields) -> str:
        """Fill a template's placeholders and trim surrounding whitespace."""
        return self.get_prompt(category, name).format(**fields).strip()

    def clear(self):
        """Forget every cached template."""
        self._templates.clear()


_loader: PromptLoader | None = None


def get_loader() -> PromptLoader:
    """Get the shared loader for the bundled templates."""
    global _loader
    if _loader is None:
        _loader = PromptLoader()
    return _loader
