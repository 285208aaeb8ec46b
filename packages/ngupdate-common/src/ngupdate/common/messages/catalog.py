import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import yaml

from .pointer import SemanticPointer

log = logging.getLogger(__name__)

DEFAULT_ASSETS_ROOT = Path(__file__).resolve().parent.parent / "assets"


def flatten_messages(data: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in data.items():
        fqn = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten_messages(value, fqn))
        elif value is not None:
            flat[fqn] = str(value)
    return flat


class MessageCatalog:
    """
    Resolves message ids to templates.

    Roots are searched in order; later roots override earlier ones. Within a
    root both ``messages/<lang>`` (packaged assets) and
    ``.ngupdate/messages/<lang>`` (workspace overrides) are read.
    """

    def __init__(self, roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self.roots: List[Path] = list(roots) if roots else [DEFAULT_ASSETS_ROOT]
        self._registry: Dict[str, Dict[str, str]] = {}
        self._loaded_langs: Set[str] = set()

    def add_root(self, path: Path) -> None:
        if path in self.roots:
            return
        self.roots.append(path)
        # Overrides change every language already cached.
        self._registry.clear()
        self._loaded_langs.clear()

    def _load_directory(self, directory: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        for file_path in sorted(directory.rglob("*")):
            if file_path.suffix.lower() not in (".yaml", ".yml"):
                continue
            try:
                with file_path.open("r", encoding="utf-8") as f:
                    content = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                log.warning(f"Skipping unreadable message file {file_path}: {e}")
                continue
            if isinstance(content, dict):
                registry.update(flatten_messages(content))
        return registry

    def _ensure_lang_loaded(self, lang: str) -> None:
        if lang in self._loaded_langs:
            return

        merged: Dict[str, str] = {}
        for root in self.roots:
            for candidate in (
                root / "messages" / lang,
                root / ".ngupdate" / "messages" / lang,
            ):
                if candidate.is_dir():
                    merged.update(self._load_directory(candidate))

        self._registry[lang] = merged
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Lookup order: target language, default language, then the id itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv("NGUPDATE_LANG", self.default_lang)

        self._ensure_lang_loaded(target_lang)
        value = self._registry.get(target_lang, {}).get(key)
        if value is not None:
            return value

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            value = self._registry.get(self.default_lang, {}).get(key)
            if value is not None:
                return value

        return key


catalog = MessageCatalog()
