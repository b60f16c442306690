from enum import Enum
from collections import abc
from dataclasses import dataclass

from .util import stringify_value

class Style(Enum):
   MATRIX = 'matrix'
   LABEL = 'label'
   SIMPLE = 'simple'
   FORM = 'form'
   SPACE_DELIMITED = 'spaceDelimited'
   PIPE_DELIMITED = 'pipeDelimited'
   DEEP_OBJECT = 'deepObject'

   def __str__(self):
      return self.value

class Shape(Enum):
   ABSENT = 'absent'
   SCALAR = 'scalar'
   SEQUENCE = 'sequence'
   MAPPING = 'mapping'

   def __str__(self):
      return self.value

@dataclass(frozen=True)
class Absent:
   shape = Shape.ABSENT

@dataclass(frozen=True)
class Scalar:
   text: str
   shape = Shape.SCALAR

@dataclass(frozen=True)
class Sequence:
   items: tuple
   shape = Shape.SEQUENCE

@dataclass(frozen=True)
class Mapping:
   pairs: tuple
   shape = Shape.MAPPING

   def keys(self):
      return [key for key, _ in self.pairs]

ABSENT = Absent()

def to_style(style):
   """Returns the Style for a style name (e.g. 'pipeDelimited') or a Style."""
   if isinstance(style, Style):
      return style
   try:
      return Style(style)
   except ValueError:
      raise ValueError('Unrecognized style {}'.format(style)) from None

def _to_mapping(pairs):
   mapping = Mapping(tuple((stringify_value(key), stringify_value(item)) for key, item in pairs))
   keys = mapping.keys()
   if len(set(keys))!=len(keys):
      raise ValueError('Mapping keys must be unique: {}'.format(','.join(keys)))
   return mapping

def to_value(value):
   """
   Converts a python value into its tagged form: None is Absent, lists and
   tuples are a Sequence, dicts are a Mapping and anything else is a Scalar.
   Tagged values are rebuilt so that their items are text.
   """
   if value is None or isinstance(value, Absent):
      return ABSENT
   if isinstance(value, Scalar):
      return Scalar(stringify_value(value.text))
   if isinstance(value, Sequence):
      return Sequence(tuple(map(stringify_value, value.items)))
   if isinstance(value, Mapping):
      return _to_mapping(value.pairs)
   if isinstance(value, (list, tuple)):
      return Sequence(tuple(map(stringify_value, value)))
   if isinstance(value, abc.Mapping):
      return _to_mapping(value.items())
   return Scalar(stringify_value(value))
