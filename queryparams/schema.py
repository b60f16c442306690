from typing import NamedTuple

from lark import Lark

from .values import Style, to_style

grammar = r"""
schema: prolog? declaration*
prolog : LONG_STRING | STRING
declaration: parameter_name ":" style explode? description?
parameter_name: NAME | BACKQUOTE_STRING
style: NAME
explode: "*"
description: LONG_STRING | STRING

BACKQUOTE_STRING: /`(?!'').*?(?<!\\)(\\\\)*?`/i
STRING: /'(?!'').*?(?<!\\)(\\\\)*?'/i
LONG_STRING: /('''.*?(?<!\\)(\\\\)*?''')/is
NAME: /[a-zA-Z_][\w\-]*/
COMMENT: /#[^\n]*/
%ignore COMMENT
%ignore /[\t \f\r\n]+/  // WS
"""

class ParameterDefinition(NamedTuple):
   name: str
   style: Style
   explode: bool
   description: str = ''

class ParameterSchema:
   def __init__(self,description=''):
      self.description = description
      self.parameters = {}

   def add_parameter(self,definition):
      if definition.name in self.parameters:
         raise ValueError('Parameter {} is declared more than once'.format(definition.name))
      self.parameters[definition.name] = definition
      return definition

   def find(self,name):
      return self.parameters.get(name)

   def __len__(self):
      return len(self.parameters)

   def __iter__(self):
      return iter(self.parameters.values())

   def documentation(self,output):

      if self.description:
         print(self.description,file=output)
         print(file=output)

      print('<table>',file=output)
      print('<thead><tr><th>Parameter</th><th>Style</th><th>Explode</th><th>Description</th></tr></thead>',file=output)
      print('<tbody>',file=output)
      for name in sorted(self.parameters.keys()):
         definition = self.parameters[name]
         print('<tr><td>{}</td><td>{}</td><td>{}</td>'.format(name,definition.style,'yes' if definition.explode else 'no'),end='',file=output)
         if not definition.description:
            print('<td></td></tr>',file=output)
         else:
            print('<td>',file=output)
            print(file=output)
            print(definition.description,file=output)
            print(file=output)
            print('</td></tr>',file=output)
      print('</tbody>',file=output)
      print('</table>',file=output)

def _decode_literal(value):
   if value.startswith("'''"):
      return value[3:-3]
   else:
      return value[1:-1]

def _process_declaration(declaration):
   name_token = declaration.children[0].children[0]
   name = name_token.value[1:-1] if name_token.type=='BACKQUOTE_STRING' else name_token.value
   style = to_style(declaration.children[1].children[0].value)
   explode = False
   description = ''
   for facet in declaration.children[2:]:
      if facet.data=='explode':
         explode = True
      elif facet.data=='description':
         description = _decode_literal(facet.children[0].value)
   return ParameterDefinition(name,style,explode,description)

class SchemaParser:

   def __init__(self):
      self.parser = Lark(grammar,parser='lalr',start='schema')

   def parse(self,source):

      if type(source)!=str:
         source = source.read()

      tree = self.parser.parse(source)

      schema = ParameterSchema()
      for child in tree.children:
         if child.data=='prolog':
            schema.description = _decode_literal(child.children[0].value)
         elif child.data=='declaration':
            schema.add_parameter(_process_declaration(child))
         else:
            raise ValueError('Unhandled tree type: '+child.data)

      return schema
