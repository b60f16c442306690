import argparse
import os
import sys

import yaml
from lark.exceptions import LarkError

from queryparams import read_parameters, parameters_to_query, serialize_item, SchemaParser

def main():
   argparser = argparse.ArgumentParser(description='queryparams')
   argparser.add_argument('--schema',help='A parameter schema to use for style declarations (or QUERYPARAMS_SCHEMA environment variable)')
   argparser.add_argument('--show-fragments',help='Show each serialized parameter before the query.',action='store_true',default=False)
   argparser.add_argument('--prefix',help='Prefix a non-empty query with ?',action='store_true',default=False)
   argparser.add_argument('operation',help='The operation to perform',choices=['validate','query','schema.check','schema.doc'])
   argparser.add_argument('files',nargs='*',help='The files to process.')

   args = argparser.parse_args()

   if len(args.files)==0:
      sources = [sys.stdin]
   else:
      sources = args.files

   schema_file = args.schema if args.schema else os.environ.get('QUERYPARAMS_SCHEMA')
   schema = None
   if schema_file and args.operation in ('validate','query'):
      with open(schema_file,'r') as input:
         try:
            schema = SchemaParser().parse(input)
         except (ValueError, LarkError) as err:
            print('Invalid schema {}:'.format(schema_file),file=sys.stderr)
            print(err,file=sys.stderr)
            sys.exit(1)

   failed = False

   for source in sources:
      location = source if type(source)==str else None
      with open(source,'r') if type(source)==str else source as input:

         try:
            if args.operation=='validate':
               count = 0
               for item in read_parameters(input,location=location,schema=schema):
                  count += 1
               print('{}: {} parameter(s)'.format(location if location else '<stdin>',count))

            elif args.operation=='query':
               params = parameters_to_query(read_parameters(input,location=location,schema=schema))
               if args.show_fragments:
                  for item in params:
                     print('{} ({}{}): {}'.format(item.name,item.style,'*' if item.explode else '',serialize_item(item)))
               query = params.render()
               print('?'+query if args.prefix and query else query)

            elif args.operation=='schema.check' or args.operation=='schema.doc':
               declarations = SchemaParser().parse(input)
               if args.operation=='schema.doc':
                  declarations.documentation(sys.stdout)

         except (ValueError, LarkError, yaml.YAMLError) as err:
            print('Invalid {}:'.format(location if location else '<stdin>'),file=sys.stderr)
            print(err,file=sys.stderr)
            failed = True

   if failed:
      sys.exit(1)

if __name__ == '__main__':

   main()
