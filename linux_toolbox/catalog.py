"""Catalog of categories and the scripts they launch, loaded from TOML."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when the catalog file cannot be turned into a Catalog."""


@dataclass
class Program:
    name: str
    script: Path
    is_favorite: bool = False


@dataclass
class Category:
    name: str
    programs: List[Program] = field(default_factory=list)


# (category name, program name, script path)
SearchMatch = Tuple[str, str, Path]


@dataclass
class Catalog:
    """Ordered categories, each holding an ordered list of programs."""

    categories: List[Category]

    def __len__(self) -> int:
        return len(self.categories)

    def programs_of(self, category_index: int) -> List[Program]:
        """Return the programs of a category, or an empty list for a bad index."""
        if 0 <= category_index < len(self.categories):
            return self.categories[category_index].programs
        return []

    def toggle_favorite(self, category_index: int, program_index: int) -> Program:
        """Flip the favorite flag of one program and return it."""
        program = self.categories[category_index].programs[program_index]
        program.is_favorite = not program.is_favorite
        return program

    def search(self, query: str) -> List[SearchMatch]:
        """Return programs whose name contains query, ignoring case, in catalog order."""
        needle = query.lower()
        return [
            (category.name, program.name, program.script)
            for category in self.categories
            for program in category.programs
            if needle in program.name.lower()
        ]


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load the catalog from a two-level TOML table.

    Top-level keys are category names; each value maps program names to
    script paths relative to the catalog file's directory.
    """
    config_path = Path(path)
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {config_path}") from None
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise CatalogError(f"Malformed catalog file {config_path}: {e}") from e

    base_dir = config_path.parent
    categories: List[Category] = []
    for category_name, entries in data.items():
        if not isinstance(entries, dict):
            raise CatalogError(
                f"Category '{category_name}' must be a table of program = \"script\" entries"
            )
        programs = []
        for program_name, script in entries.items():
            if not isinstance(script, str):
                raise CatalogError(
                    f"Script path for '{category_name}.{program_name}' must be a string"
                )
            programs.append(Program(name=program_name, script=base_dir / script))
        if not programs:
            logger.warning("Category %r has no programs", category_name)
        categories.append(Category(name=category_name, programs=programs))

    if not categories:
        raise CatalogError(f"Catalog file {config_path} defines no categories")

    logger.debug("Loaded %d categories from %s", len(categories), config_path)
    return Catalog(categories)
