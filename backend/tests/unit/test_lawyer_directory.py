"""
Unit tests for the lawyer directory.
"""

from unittest.mock import AsyncMock

import pytest

from aboga import models
from aboga.core.exceptions import NotFoundError
from aboga.services.lawyer_directory import LawyerDirectory, seed_lawyers


def count_consultations(session_factory):
    db = session_factory()
    try:
        return db.query(models.Consultation).count()
    finally:
        db.close()


class TestOpen:
    @pytest.mark.asyncio
    async def test_lists_available_lawyers_by_rating(self, sql_store, session_factory, visitor, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        directory = LawyerDirectory(sql_store, visitor)

        lawyers = await directory.open()

        assert [lawyer.rating for lawyer in lawyers] == [4.8, 4.6, 4.5]
        assert all(lawyer.available for lawyer in lawyers)
        assert directory.loading is False

    @pytest.mark.asyncio
    async def test_select_and_back(self, sql_store, session_factory, visitor, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        directory = LawyerDirectory(sql_store, visitor)
        lawyers = await directory.open()

        selected = directory.select(lawyers[1].id)
        assert directory.selected == selected
        directory.back()
        assert directory.selected is None

    @pytest.mark.asyncio
    async def test_select_unknown(self, sql_store, visitor):
        directory = LawyerDirectory(sql_store, visitor)
        await directory.open()
        with pytest.raises(NotFoundError):
            directory.select("nobody")


class TestRequestConsultation:
    @pytest.mark.asyncio
    async def test_requires_sign_in(self, sql_store, session_factory, visitor, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        directory = LawyerDirectory(sql_store, visitor)
        directory.select((await directory.open())[0].id)

        outcome = await directory.request_consultation()

        assert outcome.success is False
        assert outcome.blocked is True
        assert outcome.message == "Debes iniciar sesión para solicitar una consulta"
        assert count_consultations(session_factory) == 0

    @pytest.mark.asyncio
    async def test_agreed_rate_is_midpoint(self, sql_store, session_factory, signed_in, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        directory = LawyerDirectory(sql_store, signed_in)
        lawyers = await directory.open()
        lucia = next(lawyer for lawyer in lawyers if lawyer.license_number == "CAA-10457")
        directory.select(lucia.id)

        outcome = await directory.request_consultation(chat_session_id=None)

        assert outcome.success is True
        assert outcome.message == "Solicitud enviada. El abogado se pondrá en contacto contigo pronto."
        assert outcome.consultation.agreed_rate == 150
        assert outcome.consultation.status.value == "pending"
        assert outcome.consultation.notes == "Solicitud desde directorio de abogados"
        assert outcome.consultation.user_id == "user-1"
        assert directory.selected is None
        assert count_consultations(session_factory) == 1

    @pytest.mark.asyncio
    async def test_failure_is_acknowledged(self, sql_store, session_factory, signed_in, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        directory = LawyerDirectory(sql_store, signed_in)
        lawyer = (await directory.open())[0]
        directory.select(lawyer.id)
        sql_store.create_consultation = AsyncMock(side_effect=RuntimeError("insert failed"))

        outcome = await directory.request_consultation()

        assert outcome.success is False
        assert outcome.blocked is False
        assert outcome.message == "Error al enviar la solicitud"
        assert directory.selected == lawyer

    @pytest.mark.asyncio
    async def test_no_selection(self, sql_store, signed_in):
        with pytest.raises(NotFoundError):
            await LawyerDirectory(sql_store, signed_in).request_consultation()


class TestSeedLawyers:
    def test_skips_existing_license_numbers(self, session_factory, sample_lawyers):
        assert seed_lawyers(session_factory, sample_lawyers) == 4
        assert seed_lawyers(session_factory, sample_lawyers) == 0

    def test_refresh_replaces_rows(self, session_factory, sample_lawyers):
        seed_lawyers(session_factory, sample_lawyers)
        assert seed_lawyers(session_factory, sample_lawyers[:2], refresh=True) == 2
