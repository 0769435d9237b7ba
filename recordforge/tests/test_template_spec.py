"""
Test Module for template specification models and authoring-time checks.

Validates:
- Discriminated unions for fields, filters and views
- Field invariants: unique ids, select options, number bounds
- Metric invariant: fieldId required unless op is count
- View invariants: unique ids, single default, field references, date time field
- validate_template detail reporting
"""

from typing import Any, Dict

import pytest
from pydantic import TypeAdapter, ValidationError

from recordforge.models import (
    ChartView,
    ExplicitTimeRange,
    FieldSpec,
    FilterSpec,
    FormView,
    GroupBySpec,
    InFilter,
    MetricOp,
    MetricSpec,
    NumberField,
    SelectField,
    SummaryView,
    TableView,
    TemplateSchema,
    TemplateSpec,
    TimePreset,
)
from recordforge.services.template_validation import validate_template
from recordforge.services.view_runtime import get_default_view


# =============================================================================
# Tagged Unions
# =============================================================================

class TestDiscriminatedUnions:

    def test_field_dispatch_on_type(self):
        adapter = TypeAdapter(FieldSpec)

        number = adapter.validate_python({'id': 'n', 'type': 'number', 'min': 1})
        select = adapter.validate_python({'id': 's', 'type': 'select', 'options': ['a']})

        assert isinstance(number, NumberField)
        assert number.min == 1
        assert isinstance(select, SelectField)

    def test_unknown_field_type_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(FieldSpec).validate_python({'id': 'x', 'type': 'json'})

    def test_filter_dispatch_on_op(self):
        flt = TypeAdapter(FilterSpec).validate_python({'fieldId': 'n', 'op': 'in', 'value': ['5', 7]})

        assert isinstance(flt, InFilter)
        assert flt.value == ['5', 7]

    def test_gte_filter_requires_number(self):
        with pytest.raises(ValidationError):
            TypeAdapter(FilterSpec).validate_python({'fieldId': 'n', 'op': 'gte', 'value': 'many'})

    def test_explicit_time_range_uses_from_alias(self):
        rng = ExplicitTimeRange.model_validate({'from': '2026-01-01', 'to': '2026-01-31'})

        assert rng.from_ == '2026-01-01'
        assert rng.model_dump(by_alias=True) == {'from': '2026-01-01', 'to': '2026-01-31'}

    def test_views_parse_to_their_variants(self, expense_template):
        kinds = [type(v) for v in expense_template.views]
        assert kinds == [FormView, TableView, SummaryView, ChartView]

    def test_models_are_frozen(self, expense_template):
        with pytest.raises(ValidationError):
            expense_template.name = 'Other'


# =============================================================================
# Field Invariants
# =============================================================================

class TestFieldInvariants:

    def test_select_requires_an_option(self):
        with pytest.raises(ValidationError):
            SelectField(id='s', options=[])

    def test_duplicate_field_ids_rejected(self):
        with pytest.raises(ValidationError, match="duplicate field id 'a'"):
            TemplateSchema.model_validate({
                'fields': [
                    {'id': 'a', 'type': 'string'},
                    {'id': 'a', 'type': 'number'},
                ]
            })

    def test_schema_requires_a_field(self):
        with pytest.raises(ValidationError):
            TemplateSchema(fields=[])

    def test_number_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            NumberField(id='n', min=5, max=1)

    def test_required_defaults_to_false(self):
        assert NumberField(id='n').required is False


# =============================================================================
# Metric and GroupBy Invariants
# =============================================================================

class TestMetricInvariants:

    @pytest.mark.parametrize('op', ['sum', 'avg', 'min', 'max'])
    def test_field_required_for_value_ops(self, op):
        with pytest.raises(ValidationError, match='metric.fieldId is required'):
            MetricSpec(id='m', label='M', op=op)

    def test_blank_field_id_rejected(self):
        with pytest.raises(ValidationError):
            MetricSpec(id='m', label='M', op='sum', fieldId='   ')

    def test_count_without_field(self):
        metric = MetricSpec(id='m', label='M', op='count')
        assert metric.op == MetricOp.COUNT
        assert metric.fieldId is None

    def test_group_by_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            GroupBySpec(fieldId='category', limit=0)

    def test_group_sort_direction_defaults_to_desc(self):
        group_by = GroupBySpec.model_validate({'fieldId': 'c', 'sort': {'metricId': 'm'}})
        assert group_by.sort.dir.value == 'desc'


# =============================================================================
# Template Invariants
# =============================================================================

class TestTemplateInvariants:

    def test_duplicate_view_ids_rejected(self, template_payload: Dict[str, Any]):
        template_payload['views'].append({'id': 'entry', 'type': 'form'})

        with pytest.raises(ValidationError, match="duplicate view id 'entry'"):
            TemplateSpec.model_validate(template_payload)

    def test_two_default_views_rejected(self, template_payload: Dict[str, Any]):
        template_payload['views'][1]['default'] = True

        with pytest.raises(ValidationError, match='only one view may be marked default'):
            TemplateSpec.model_validate(template_payload)

    def test_unknown_field_reference_rejected(self, template_payload: Dict[str, Any]):
        template_payload['views'][1]['columns'] = ['date', 'vendor']

        with pytest.raises(ValidationError, match="unknown field 'vendor'"):
            TemplateSpec.model_validate(template_payload)

    def test_metric_filter_reference_checked(self, template_payload: Dict[str, Any]):
        template_payload['views'][2]['metrics'][0]['filters'] = [
            {'fieldId': 'ghost', 'op': 'eq', 'value': 1},
        ]

        with pytest.raises(ValidationError, match="unknown field 'ghost'"):
            TemplateSpec.model_validate(template_payload)

    def test_time_field_must_be_date(self, template_payload: Dict[str, Any]):
        template_payload['views'][3]['timeFieldId'] = 'amount'

        with pytest.raises(ValidationError, match='must reference a date field'):
            TemplateSpec.model_validate(template_payload)

    def test_chart_requires_time_field(self, template_payload: Dict[str, Any]):
        del template_payload['views'][3]['timeFieldId']

        with pytest.raises(ValidationError):
            TemplateSpec.model_validate(template_payload)

    def test_summary_requires_a_metric(self, template_payload: Dict[str, Any]):
        template_payload['views'][2]['metrics'] = []

        with pytest.raises(ValidationError):
            TemplateSpec.model_validate(template_payload)

    def test_default_time_range_preset(self, template_payload: Dict[str, Any]):
        template_payload['views'][2]['defaultTimeRange'] = {'preset': 'this_year'}

        template = TemplateSpec.model_validate(template_payload)

        assert template.views[2].defaultTimeRange.preset == TimePreset.THIS_YEAR

    def test_get_view(self, expense_template):
        assert expense_template.get_view('trend').type == 'chart'
        assert expense_template.get_view('missing') is None


class TestDefaultView:

    def test_marked_default_wins(self, expense_template):
        assert get_default_view(expense_template).id == 'entry'

    def test_first_view_when_none_marked(self, template_payload: Dict[str, Any]):
        template_payload['views'][0]['default'] = False
        template_payload['views'] = template_payload['views'][1:] + template_payload['views'][:1]

        template = TemplateSpec.model_validate(template_payload)

        assert get_default_view(template).id == 'ledger'


# =============================================================================
# validate_template
# =============================================================================

class TestValidateTemplate:

    def test_valid_template(self, template_payload: Dict[str, Any]):
        template, details = validate_template(template_payload)

        assert details == []
        assert template.name == 'Expenses'

    def test_existing_template_passes_through(self, expense_template):
        template, details = validate_template(expense_template)
        assert template is expense_template
        assert details == []

    def test_non_object_payload(self):
        template, details = validate_template(['not', 'a', 'template'])

        assert template is None
        assert details[0].field == '_'

    def test_metric_without_field_reports_path(self, template_payload: Dict[str, Any]):
        del template_payload['views'][2]['metrics'][0]['fieldId']

        template, details = validate_template(template_payload)

        assert template is None
        assert len(details) == 1
        assert details[0].field.startswith('views.2.summary.metrics.0')
        assert details[0].message == 'metric.fieldId is required when op is "sum"'

    def test_select_without_options_reports_path(self, template_payload: Dict[str, Any]):
        template_payload['schema']['fields'][2]['options'] = []

        template, details = validate_template(template_payload)

        assert template is None
        assert details[0].field == 'schema.fields.2.select.options'
