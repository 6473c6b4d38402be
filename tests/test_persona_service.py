"""Tests for the persona roster and host lines."""

import random

import pytest

from voice_roundtable.models import Persona, PersonalityTag
from voice_roundtable.services import PersonaService, load_personas
from voice_roundtable.services.host_lines import (
    HOST_REMARKS,
    DirectiveCategory,
    build_greeting,
    classify_directive,
    join_names,
    pick_host_remark,
)


class TestPersonaService:
    """Tests for PersonaService."""

    def test_load_from_file(self, tmp_path):
        """Test loading a roster YAML file."""
        path = tmp_path / "personas.yaml"
        path.write_text(
            "personas:\n"
            "  - name: Ava\n"
            "    personality: cheerful\n"
            "    voice_id: voice-ava\n"
            "  - id: ben-1\n"
            "    name: Ben\n"
            "    personality: Sarcastic\n"
            "    voice_id: voice-ben\n"
            "    stability: 0.4\n"
        )

        personas = load_personas(path)

        assert [p.name for p in personas] == ["Ava", "Ben"]
        assert personas[1].personality is PersonalityTag.SARCASTIC
        assert personas[1].stability == 0.4
        assert personas[1].id == "ben-1"

    def test_missing_file(self, tmp_path):
        """Test a missing roster file."""
        with pytest.raises(FileNotFoundError):
            PersonaService.load_from_file(tmp_path / "nope.yaml")

    def test_personas_must_be_a_list(self):
        """Test a malformed roster."""
        with pytest.raises(ValueError):
            PersonaService.from_dict({"personas": {"name": "Ava"}})

    def test_duplicate_ids_rejected(self, ava):
        """Test that ids are unique."""
        with pytest.raises(ValueError):
            PersonaService([ava, ava])

    def test_list_keeps_roster_order(self, ava, ben):
        """Test that personas are listed in load order."""
        service = PersonaService([ava, ben])

        assert service.list_personas() == [ava, ben]
        assert len(service) == 2


class TestHostLines:
    """Tests for greetings and host remarks."""

    @pytest.mark.parametrize("directive,expected", [
        (None, DirectiveCategory.GENERIC),
        ("   ", DirectiveCategory.GENERIC),
        ("Support a friend who is struggling", DirectiveCategory.SUPPORT),
        ("Quarterly business review", DirectiveCategory.PROFESSIONAL),
        ("Tell a story about dragons", DirectiveCategory.NARRATIVE),
        ("A casual chat over coffee", DirectiveCategory.CASUAL),
        ("Debate renewable energy", DirectiveCategory.GENERIC),
    ])
    def test_classify_directive(self, directive, expected):
        """Test directive categories."""
        assert classify_directive(directive) is expected

    def test_join_names(self, ava, ben):
        """Test natural name lists."""
        cleo = Persona(name="Cleo", personality="wise", voice_id="v", stability=0.5, similarity=0.5)

        assert join_names([ava]) == "Ava"
        assert join_names([ava, ben]) == "Ava and Ben"
        assert join_names([ava, ben, cleo]) == "Ava, Ben and Cleo"

    def test_every_greeting_names_participants(self, ava, ben):
        """Test all templates include the participant names."""
        for directive in (None, "support", "business meeting", "story time", "casual chat"):
            assert "Ava and Ben" in build_greeting([ava, ben], directive)

    def test_generic_greeting(self, ava):
        """Test the default greeting text."""
        assert build_greeting([ava]) == (
            "Hey everyone! Welcome to our voice chat. We have Ava here today. What's on your mind?"
        )

    def test_pick_host_remark(self):
        """Test remarks come from the canned list."""
        assert pick_host_remark(random.Random(7)) in HOST_REMARKS
