"""Tests for the substitution engine"""

import logging

from parameters import ParameterKind
from substitution import quote_literal


def _by_field(params, field):
    return next(p for p in params if p.field == field)


class TestSubstitutionEngine:
    """Test cases for SubstitutionEngine"""
    
    def test_simple_parenthesised_literal(self, detector, engine):
        """Test only the literal changes in a parenthesised equality"""
        text = "SELECT *\nFROM t\nWHERE created = ('2023-05-01')\n"
        param = detector.detect_parameters(text)[0]
        
        result = engine.apply(text, param, '2023-06-01')
        
        assert result == "SELECT *\nFROM t\nWHERE created = ('2023-06-01')\n"
    
    def test_simple_replaces_only_its_occurrence(self, detector, engine):
        """Test an identical literal elsewhere is left alone"""
        text = "WHERE a = 'x' AND b = 'x'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[1], 'y')
        
        assert result == "WHERE a = 'x' AND b = 'y'"
    
    def test_quotes_are_escaped(self, detector, engine):
        """Test embedded single quotes are doubled"""
        text = "WHERE name = 'x'"
        param = detector.detect_parameters(text)[0]
        
        assert engine.apply(text, param, "O'Brien") == "WHERE name = 'O''Brien'"
    
    def test_in_clause_rebuild(self, detector, engine):
        """Test IN members are re-quoted and the prefix kept"""
        text = "SELECT 1 WHERE Status  In ('A','B') ORDER BY 1"
        param = detector.detect_parameters(text)[0]
        
        result = engine.apply(text, param, "X, Y ,Z")
        
        assert result == "SELECT 1 WHERE Status  In ('X', 'Y', 'Z') ORDER BY 1"
    
    def test_in_clause_qualified_field(self, detector, engine):
        """Test a qualified IN clause is rebuilt at its exact offset"""
        text = "WHERE o.status IN ('A','B')"
        param = detector.detect_parameters(text)[0]
        
        assert engine.apply(text, param, "C") == "WHERE o.status IN ('C')"
    
    def test_in_clause_only_targets_its_clause(self, detector, engine):
        """Test a second identical IN clause is untouched"""
        text = "a IN ('1')\nUNION\na IN ('1')"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[1], "2")
        
        assert result == "a IN ('1')\nUNION\na IN ('2')"
    
    def test_in_clause_fallback_to_clause_text(self, detector, engine, caplog):
        """Test a stale clause offset falls back to replacing the clause text"""
        text = "WHERE s IN ('A','B')"
        param = detector.detect_parameters(text)[0]
        shifted = "-- moved\n" + text
        
        with caplog.at_level(logging.WARNING):
            result = engine.apply(shifted, param, "C")
        
        assert result == "-- moved\nWHERE s IN ('C')"
        assert "Could not locate IN clause" in caplog.text
    
    def test_between_start_keeps_date_style(self, detector, engine):
        """Test a new ISO start date is rendered in the literal's style"""
        text = "WHERE d BETWEEN '01-JAN-24' AND '15-JAN-24'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[0], '2024-02-03')
        
        assert result == "WHERE d BETWEEN '03-FEB-24' AND '15-JAN-24'"
    
    def test_between_end_keeps_date_style(self, detector, engine):
        """Test the end bound honours lower-case full names"""
        text = "where d between '1-january-2024' and '15-january-2024'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[1], '2024-03-20')
        
        assert result == "where d between '1-january-2024' and '20-march-2024'"
    
    def test_between_same_values(self, detector, engine):
        """Test the end bound is found even when both bounds are equal"""
        text = "WHERE d BETWEEN '01-JAN-24' AND '01-JAN-24'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[1], '2024-01-31')
        
        assert result == "WHERE d BETWEEN '01-JAN-24' AND '31-JAN-24'"
    
    def test_between_iso_literals_inserted_verbatim(self, detector, engine):
        """Test ISO bounds have no style to apply"""
        text = "WHERE d BETWEEN '2024-01-01' AND '2024-01-31'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[0], '2024-01-15')
        
        assert result == "WHERE d BETWEEN '2024-01-15' AND '2024-01-31'"
    
    def test_date_param_with_non_iso_input(self, detector, engine):
        """Test free text typed into a date parameter is inserted as-is"""
        text = "WHERE d BETWEEN '01-JAN-24' AND '15-JAN-24'"
        params = detector.detect_parameters(text)
        
        result = engine.apply(text, params[0], '02-JAN-24')
        
        assert result == "WHERE d BETWEEN '02-JAN-24' AND '15-JAN-24'"
    
    def test_fallback_replaces_every_occurrence(self, detector, engine, caplog):
        """Test a missing literal at the expected offset degrades to a global replace"""
        text = "WHERE a = 'x'"
        param = detector.detect_parameters(text)[0]
        mutated = "WHERE b = 'x' OR c = 'x'"
        param.start = len(mutated)
        
        with caplog.at_level(logging.WARNING):
            result = engine.apply(mutated, param, 'z')
        
        assert result == "WHERE b = 'z' OR c = 'z'"
        assert "Targeted replace failed" in caplog.text
    
    def test_no_op_substitution_is_stable(self, detector, engine, sample_sql):
        """Test applying each parameter's own value keeps the parameter set"""
        before = detector.detect_parameters(sample_sql)
        
        for index, param in enumerate(before):
            fresh = detector.detect_parameters(sample_sql)[index]
            result = engine.apply(sample_sql, fresh, fresh.value)
            after = detector.detect_parameters(result)
            
            assert [(p.field, p.kind, p.value) for p in after] == \
                [(p.field, p.kind, p.value) for p in before]
    
    def test_edit_preserves_other_text(self, detector, engine, sample_sql):
        """Test an edit touches nothing but its literal"""
        params = detector.detect_parameters(sample_sql)
        customer = _by_field(params, 'customer')
        
        result = engine.apply(sample_sql, customer, 'GLOBEX%')
        
        assert result == sample_sql.replace("'ACME%'", "'GLOBEX%'")
        assert _by_field(detector.detect_parameters(result), 'customer').kind == ParameterKind.SIMPLE


def test_quote_literal():
    assert quote_literal("a'b") == "'a''b'"
    assert quote_literal("") == "''"
