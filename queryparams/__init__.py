"""Query string serialization of parameters with OpenAPI style and explode semantics"""
__version__ = '0.1.0'
__author__='Alex Miłowski'
__author_email__='alex@milowski.com'

from .values import Style, Shape, Absent, Scalar, Sequence, Mapping, ABSENT, to_value, to_style
from .encoder import QueryParams, ParameterItem, InvalidStyleCombination, parameter_item, validate_style, serialize_item, render_items, read_parameters, parameters_to_query
from .schema import SchemaParser, ParameterSchema, ParameterDefinition

__all__ = ['Style', 'Shape', 'Absent', 'Scalar', 'Sequence', 'Mapping', 'ABSENT', 'to_value', 'to_style',
           'QueryParams', 'ParameterItem', 'InvalidStyleCombination', 'parameter_item', 'validate_style', 'serialize_item', 'render_items', 'read_parameters', 'parameters_to_query',
           'SchemaParser', 'ParameterSchema', 'ParameterDefinition']
