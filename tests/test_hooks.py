import pytest

from repokit.hooks import DiagnosticSaveHooks, SaveHooks, SavePhase


@pytest.mark.unit
class TestDiagnosticSaveHooks:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(DiagnosticSaveHooks(), SaveHooks)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("phase", list(SavePhase))
    async def test_pass_through(self, phase: SavePhase) -> None:
        hooks = DiagnosticSaveHooks()
        payload = {"name": "Ann"}

        assert await hooks.before_save(payload, phase) is payload
        assert await hooks.after_save(payload, phase, {"extra": True}) is payload

    def test_phase_values(self) -> None:
        assert [phase.value for phase in SavePhase] == [
            "create",
            "bulk_create",
            "update",
            "delete",
        ]
