import os
from typing import NamedTuple, Generator, Iterator

import yaml

from .schema import SchemaParser
from .util import flatten_pairs, join_pairs
from .values import Style, Shape, Absent, Scalar, Sequence, Mapping, ABSENT, to_style, to_value

DIRECTIVES = {'~value', '~style', '~explode'}

class ParameterItem(NamedTuple):
   name: str
   value: Absent | Scalar | Sequence | Mapping
   style: Style
   explode: bool

class InvalidStyleCombination(ValueError):
   """Raised when a style is not defined for a value shape and explode flag."""

   def __init__(self, style, shape, explode, reason):
      super().__init__(reason)
      self.style = style
      self.shape = shape
      self.explode = explode
      self.reason = reason

def validate_style(style, value, explode):
   shape = value.shape

   if style in (Style.SPACE_DELIMITED, Style.PIPE_DELIMITED):
      if shape==Shape.SCALAR:
         raise InvalidStyleCombination(style, shape, explode, f'{style} style is not applicable to scalar values')
      if shape==Shape.ABSENT:
         raise InvalidStyleCombination(style, shape, explode, f'{style} style requires a sequence or mapping value')
      if explode:
         raise InvalidStyleCombination(style, shape, explode, f'{style} style with explode=true is not applicable')

   if style==Style.DEEP_OBJECT:
      if shape!=Shape.MAPPING:
         raise InvalidStyleCombination(style, shape, explode, f'{style} style only applies to mapping values')
      if not explode:
         raise InvalidStyleCombination(style, shape, explode, f'{style} style requires explode=true')

def parameter_item(name, value, style=Style.FORM, explode=True):
   if not isinstance(name, str) or len(name)==0:
      raise ValueError('A parameter name must be a non-empty string, not {}'.format(repr(name)))
   if type(explode)!=bool:
      raise ValueError('The explode flag for {} must be a boolean, not {}'.format(name, repr(explode)))
   style = to_style(style)
   value = to_value(value)
   validate_style(style, value, explode)
   return ParameterItem(name, value, style, explode)

def serialize_matrix(name, value, explode):
   match value:
      case Absent():
         return f';{name}'
      case Scalar(text):
         return f';{name}={text}'
      case Sequence(items) if explode:
         return ''.join(f';{name}={item}' for item in items)
      case Sequence(items):
         return f';{name}=' + ','.join(items)
      case Mapping(pairs) if explode:
         return join_pairs(((f';{key}', item) for key, item in pairs), '')
      case Mapping(pairs):
         return f';{name}=' + ','.join(flatten_pairs(pairs))

def serialize_label(name, value, explode):
   match value:
      case Absent():
         return '.'
      case Scalar(text):
         return f'.{text}'
      case Sequence(items):
         return '.' + ('.' if explode else ',').join(items)
      case Mapping(pairs) if explode:
         return '.' + join_pairs(pairs, '.')
      case Mapping(pairs):
         return '.' + ','.join(flatten_pairs(pairs))

def serialize_simple(name, value, explode):
   match value:
      case Absent():
         return ''
      case Scalar(text):
         return text
      case Sequence(items):
         # explode has no effect on lists
         return ','.join(items)
      case Mapping(pairs) if explode:
         return join_pairs(pairs, ',')
      case Mapping(pairs):
         return ','.join(flatten_pairs(pairs))

def serialize_form(name, value, explode):
   match value:
      case Absent() | Sequence(()) | Mapping(()):
         return f'{name}='
      case Scalar(text):
         return f'{name}={text}'
      case Sequence(items) if explode:
         return '&'.join(f'{name}={item}' for item in items)
      case Sequence(items):
         return f'{name}=' + ','.join(items)
      case Mapping(pairs) if explode:
         return join_pairs(pairs, '&')
      case Mapping(pairs):
         return f'{name}=' + ','.join(flatten_pairs(pairs))

def serialize_delimited(name, value, delimiter):
   match value:
      case Sequence(items):
         return f'{name}=' + delimiter.join(items)
      case Mapping(pairs):
         return f'{name}=' + delimiter.join(flatten_pairs(pairs))

def serialize_space_delimited(name, value):
   return serialize_delimited(name, value, '%20')

def serialize_pipe_delimited(name, value):
   return serialize_delimited(name, value, '%7C')

def serialize_deep_object(name, value):
   return join_pairs(((f'{name}%5B{key}%5D', item) for key, item in value.pairs), '&')

def serialize_item(item):
   validate_style(item.style, item.value, item.explode)
   match item.style:
      case Style.MATRIX:
         return serialize_matrix(item.name, item.value, item.explode)
      case Style.LABEL:
         return serialize_label(item.name, item.value, item.explode)
      case Style.SIMPLE:
         return serialize_simple(item.name, item.value, item.explode)
      case Style.FORM:
         return serialize_form(item.name, item.value, item.explode)
      case Style.SPACE_DELIMITED:
         return serialize_space_delimited(item.name, item.value)
      case Style.PIPE_DELIMITED:
         return serialize_pipe_delimited(item.name, item.value)
      case Style.DEEP_OBJECT:
         return serialize_deep_object(item.name, item.value)

def render_items(items):
   """
   Serializes the items in order. The fragments are joined with '&' only when
   every item uses the form style; any other style carries its own leading
   delimiter and so the fragments are concatenated.
   """
   items = list(items)
   if len(items)==0:
      return ''
   fragments = [serialize_item(item) for item in items]
   if all(item.style==Style.FORM for item in items):
      return '&'.join(fragments)
   return ''.join(fragments)

class QueryParams:
   """An append-only collection of parameters rendered as a query string."""

   def __init__(self, items=None):
      self.entries = []
      if items is not None:
         self.extend(items)

   def append(self, name: str, value=None, style=Style.FORM, explode: bool = True) -> None:
      self.entries.append(parameter_item(name, value, style=style, explode=explode))

   def extend(self, items):
      for item in items:
         if not isinstance(item, ParameterItem):
            raise ValueError('{} is not a parameter item'.format(repr(item)))
         self.append(item.name, item.value, style=item.style, explode=item.explode)

   def get(self, name: str):
      for entry in self.entries:
         if entry.name==name:
            return entry.value
      return ABSENT

   def get_all(self, name: str) -> list:
      return [entry.value for entry in self.entries if entry.name==name]

   def fragments(self) -> list[str]:
      return [serialize_item(entry) for entry in self.entries]

   def render(self) -> str:
      return render_items(self.entries)

   def __str__(self):
      return self.render()

   def __repr__(self):
      return 'QueryParams({})'.format(repr(self.entries))

   def __len__(self):
      return len(self.entries)

   def __iter__(self):
      return iter(self.entries)

   def __contains__(self, name):
      return any(entry.name==name for entry in self.entries)

def _read_schema(schema_source, location=None):
   parser = SchemaParser()
   if type(schema_source)==str:
      return parser.parse(schema_source)
   elif type(schema_source)==dict:
      fileref = schema_source.get('source')
      if fileref is None:
         raise ValueError('Missing the source key for ~schema')
      if location is not None:
         dir = os.path.dirname(os.path.abspath(location))
         fileref = os.path.join(dir, fileref)
      with open(fileref, 'r') as input:
         return parser.parse(input)
   raise ValueError('{} is not a supported schema reference'.format(repr(schema_source)))

def _is_declaration(spec):
   return type(spec)==dict and any(key in spec for key in DIRECTIVES)

def read_parameters(source, location=None, schema=None):
   if type(source)==tuple:
      location = source[1]
      source = source[0]

   if type(source)!=dict:
      source = yaml.load(source, Loader=yaml.SafeLoader)

   if source is None:
      return

   if type(source)!=dict:
      raise ValueError('A parameter document must be a mapping, not {}'.format(type(source).__name__))

   if schema is None and '~schema' in source:
      schema = _read_schema(source['~schema'], location=location)

   for name, spec in source.items():
      name = str(name)
      if name.startswith('~'):
         if name!='~schema':
            raise ValueError('Unrecognized directive {}'.format(name))
         continue

      definition = schema.find(name) if schema is not None else None
      style = definition.style if definition is not None else Style.FORM
      explode = definition.explode if definition is not None else True

      if _is_declaration(spec):
         for key in spec.keys():
            if key not in DIRECTIVES:
               raise ValueError('Unrecognized key {} in the declaration of {}'.format(key, name))
         value = spec.get('~value')
         style = spec.get('~style', style)
         explode = spec.get('~explode', explode)
      else:
         value = spec

      yield parameter_item(name, value, style=style, explode=explode)

def parameters_to_query(stream):
   if isinstance(stream, ParameterItem):
      return QueryParams([stream])
   if isinstance(stream, (Generator, Iterator, list, tuple)):
      return QueryParams(stream)
   raise ValueError('{} is not a parameter stream'.format(type(stream).__name__))
