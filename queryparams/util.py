
def stringify_value(value):
   if isinstance(value, str):
      return value
   elif value is None:
      return ''
   elif isinstance(value, bool):
      return 'true' if value else 'false'
   elif isinstance(value, (list, tuple, set, dict)):
      raise ValueError('Nested value {} cannot be serialized'.format(repr(value)))
   else:
      return str(value)

def flatten_pairs(pairs):
   for key, value in pairs:
      yield key
      yield value

def join_pairs(pairs, separator, assignment='='):
   return separator.join(f'{key}{assignment}{value}' for key, value in pairs)
