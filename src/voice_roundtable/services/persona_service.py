"""
Persona Service - Loads the read-only persona roster
"""
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml
from loguru import logger

from ..models import Persona


class PersonaService:
    """In-memory roster of personas keyed by id"""

    def __init__(self, personas: Optional[List[Persona]] = None):
        self._personas: Dict[str, Persona] = {}
        for persona in personas or []:
            self.add(persona)

    def add(self, persona: Persona):
        if persona.id in self._personas:
            raise ValueError(f"Duplicate persona id: {persona.id}")
        self._personas[persona.id] = persona

    def list_personas(self) -> List[Persona]:
        return list(self._personas.values())

    def __len__(self) -> int:
        return len(self._personas)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PersonaService':
        entries = data.get('personas') or []
        if not isinstance(entries, list):
            raise ValueError("'personas' must be a list")
        return cls([Persona.from_dict(entry) for entry in entries])

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> 'PersonaService':
        """Load a roster YAML file with a top-level 'personas' list"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Persona file not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        service = cls.from_dict(data)
        logger.info(f"Loaded {len(service)} personas from {path}")
        return service


def load_personas(path: Union[str, Path]) -> List[Persona]:
    return PersonaService.load_from_file(path).list_personas()
