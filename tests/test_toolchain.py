"""Tests for mirari.core.toolchain module."""

from mirari.core.toolchain import Toolchain


class TestToolchain:
    """Tests for Toolchain class."""

    def test_defaults(self):
        """Test default tool names."""
        toolchain = Toolchain()
        assert toolchain.crunch == "mir-crunch"
        assert toolchain.opam == "opam"
        assert toolchain.obuild == "obuild"
        assert toolchain.mir_build == "mir-build"

    def test_from_env_overrides(self):
        """Test that MIRARI_* variables override defaults."""
        toolchain = Toolchain.from_env(
            {"MIRARI_OBUILD": "/opt/bin/obuild", "MIRARI_CRUNCH": "ocaml-crunch"}
        )
        assert toolchain.obuild == "/opt/bin/obuild"
        assert toolchain.crunch == "ocaml-crunch"
        assert toolchain.opam == "opam"

    def test_from_env_ignores_empty(self):
        """Test that empty variables fall back to defaults."""
        toolchain = Toolchain.from_env({"MIRARI_OPAM": ""})
        assert toolchain.opam == "opam"

    def test_from_process_env(self, monkeypatch):
        """Test reading os.environ by default."""
        monkeypatch.setenv("MIRARI_MIR_BUILD", "mir-build-dev")
        assert Toolchain.from_env().mir_build == "mir-build-dev"

    def test_validate(self):
        """Test validation of tool names."""
        assert Toolchain().validate() == []
        errors = Toolchain(opam="  ").validate()
        assert len(errors) == 1
        assert "opam" in errors[0]
