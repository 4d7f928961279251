"""
Unit tests for the keyword dispatcher.
"""

import pytest

from aboga.services.query_classifier import (
    DISPATCH_RULES,
    DispatchRule,
    QueryClassifier,
    contains_all,
    dispatch,
    get_query_classifier,
)
from aboga.services.response_templates import QueryType, get_template


class TestKeywordRules:
    """Each rule selects its template."""

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("Necesito una carta notarial de requerimiento", QueryType.NOTARIAL_LETTER),
            ("¿Cómo redacto una CARTA NOTARIAL?", QueryType.NOTARIAL_LETTER),
            ("Quiero presentar denuncia por usurpación", QueryType.USURPATION_COMPLAINT),
            ("USURPACIÓN de mi terreno", QueryType.USURPATION_COMPLAINT),
            ("Necesito información sobre desalojo", QueryType.EVICTION),
            ("El ocupante es precario", QueryType.EVICTION),
            ("Modelo de contrato de compraventa", QueryType.SALE_CONTRACT),
            ("¿Cómo consulto una partida registral?", QueryType.REGISTRY_SEARCH),
            ("Trámite en Sunarp", QueryType.REGISTRY_SEARCH),
            ("Hola, buenos días", QueryType.GENERAL),
        ],
    )
    def test_classifies_query(self, query, expected):
        assert get_query_classifier().classify_query(query) is expected

    def test_notarial_rule_needs_both_keywords(self):
        assert get_query_classifier().classify_query("Una carta para mi arrendador") is QueryType.GENERAL
        assert get_query_classifier().classify_query("Trámite notarial de poder") is QueryType.GENERAL

    def test_sale_rule_needs_both_keywords(self):
        assert get_query_classifier().classify_query("compraventa de un auto") is QueryType.GENERAL

    def test_notarial_letter_template_returned(self):
        result = dispatch("xx CARTA yy Notarial zz")
        assert result == get_template(QueryType.NOTARIAL_LETTER)
        assert result.tipo_consulta == "Carta notarial de requerimiento"


class TestRuleOrdering:
    """First matching rule wins."""

    def test_denuncia_beats_sunarp(self):
        assert dispatch("denuncia y partida en sunarp").tipo_consulta == "Denuncia por usurpación"

    def test_notarial_beats_desalojo(self):
        assert dispatch("carta notarial previa al desalojo").tipo_consulta == "Carta notarial de requerimiento"

    def test_desalojo_beats_contract(self):
        result = dispatch("desalojo tras contrato de compraventa")
        assert result.tipo_consulta == "Desalojo por ocupación precaria"

    def test_rules_are_declared_in_priority_order(self):
        assert [rule.query_type for rule in DISPATCH_RULES] == [
            QueryType.NOTARIAL_LETTER,
            QueryType.USURPATION_COMPLAINT,
            QueryType.EVICTION,
            QueryType.SALE_CONTRACT,
            QueryType.REGISTRY_SEARCH,
        ]

    def test_custom_rules(self):
        classifier = QueryClassifier(rules=[DispatchRule(contains_all("poder"), QueryType.SALE_CONTRACT, "test")])
        assert classifier.classify_query("carta poder") is QueryType.SALE_CONTRACT
        assert classifier.classify_query("carta notarial") is QueryType.GENERAL


class TestFallback:
    """Queries without keywords get the generic template."""

    def test_fallback_lists_are_empty(self):
        result = dispatch("¿Qué necesito para casarme?")
        assert result.tipo_consulta == "Consulta general"
        assert result.requisitos == []
        assert result.pasos == []
        assert result.documentos_modelo == []
        assert result.campos_minimos_para_redaccion == []
        assert result.alertas_legales == []
        assert result.fuentes == []

    def test_empty_query(self):
        assert dispatch("").tipo_consulta == "Consulta general"


class TestPurity:
    """Dispatch depends only on the lowercased input."""

    def test_case_insensitive(self):
        assert dispatch("DESALOJO") == dispatch("desalojo")

    def test_returns_independent_copies(self):
        first = dispatch("sunarp")
        first.pasos.append("modificado")
        first.tipo_consulta = "otro"

        second = dispatch("sunarp")
        assert "modificado" not in second.pasos
        assert second.tipo_consulta == "Búsqueda de partida registral en SUNARP"
