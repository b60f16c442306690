import yaml

import pytest

from queryparams import QueryParams, ParameterItem, Style, Absent, Scalar, Sequence, Mapping, ABSENT, InvalidStyleCombination, read_parameters, parameters_to_query, SchemaParser

PARAMS_A = """
color: [blue, black, brown]
size: large
id:
  ~style: simple
  ~value: 5
"""

PARAMS_A_STREAM = [
   ParameterItem('color', Sequence(('blue','black','brown')), Style.FORM, True),
   ParameterItem('size', Scalar('large'), Style.FORM, True),
   ParameterItem('id', Scalar('5'), Style.SIMPLE, True),
]

PARAMS_B = """
~schema: |
  '''Palette parameters'''
  color : matrix
  filter : deepObject*
color: [blue, black]
filter: {R: 100, G: 200}
point:
  ~style: label
  ~explode: false
  ~value: {x: 1, y: 2}
empty:
  ~style: matrix
"""

PARAMS_B_STREAM = [
   ParameterItem('color', Sequence(('blue','black')), Style.MATRIX, False),
   ParameterItem('filter', Mapping((('R','100'),('G','200'))), Style.DEEP_OBJECT, True),
   ParameterItem('point', Mapping((('x','1'),('y','2'))), Style.LABEL, False),
   ParameterItem('empty', ABSENT, Style.MATRIX, True),
]

@pytest.fixture
def params_a() -> dict:
   return yaml.load(PARAMS_A,Loader=yaml.SafeLoader)

def test_empty() -> None:
   params = QueryParams()
   assert len(params)==0
   assert params.render()==''
   assert str(params)==''

def test_default_style() -> None:
   params = QueryParams()
   params.append('color','blue')
   assert str(params)=='color=blue'
   entry = next(iter(params))
   assert entry.style==Style.FORM
   assert entry.explode is True

def test_form_join() -> None:
   params = QueryParams()
   params.append('color','blue')
   params.append('size','large')
   assert params.render()=='color=blue&size=large'

def test_mixed_join() -> None:
   params = QueryParams()
   params.append('id','5',style='simple')
   params.append('color',['blue','black'])
   assert params.render()=='5color=blue&color=black'

def test_render_idempotent() -> None:
   params = QueryParams()
   params.append('color',['blue','black'],style='matrix',explode=True)
   params.append('point',{'x':1,'y':2},style='label',explode=False)
   first = params.render()
   assert first==';color=blue;color=black.x,1,y,2'
   assert params.render()==first
   assert str(params)==first

def test_get() -> None:
   params = QueryParams()
   params.append('color','blue')
   params.append('color',['red','green'],style='matrix')
   params.append('filter',{'R':100},style='deepObject')
   assert params.get('color')==Scalar('blue')
   assert params.get('filter')==Mapping((('R','100'),))
   assert params.get('missing') is ABSENT
   assert 'color' in params
   assert 'missing' not in params

def test_get_all() -> None:
   params = QueryParams()
   params.append('color','blue')
   params.append('size','large')
   params.append('color',['red','green'])
   assert params.get_all('color')==[Scalar('blue'),Sequence(('red','green'))]
   assert params.get_all('missing')==[]

def test_failed_append_leaves_state() -> None:
   params = QueryParams()
   params.append('color','blue')
   with pytest.raises(InvalidStyleCombination):
      params.append('filter',['a','b'],style='deepObject')
   assert len(params)==1
   assert params.render()=='color=blue'

def test_invalid_arguments() -> None:
   params = QueryParams()
   with pytest.raises(ValueError):
      params.append('','blue')
   with pytest.raises(ValueError):
      params.append('color','blue',style='fancy')
   with pytest.raises(ValueError):
      params.append('color','blue',explode='yes')
   with pytest.raises(ValueError):
      params.append('color',[['nested']])
   with pytest.raises(ValueError):
      params.append('color',Mapping((('R','1'),('R','2'))))
   assert len(params)==0

def test_value_conversion() -> None:
   params = QueryParams()
   params.append('flags',[True,False,1,2.5])
   params.append('tags',('a','b'),explode=False)
   assert params.get('flags')==Sequence(('true','false','1','2.5'))
   assert params.get('tags')==Sequence(('a','b'))
   assert params.render()=='flags=true&flags=false&flags=1&flags=2.5&tags=a,b'

def test_tagged_value_conversion() -> None:
   params = QueryParams()
   params.append('color',Mapping((('R',100),('G',200),('B',150))),style='label',explode=False)
   params.append('id',Scalar(5),style='simple')
   params.append('sizes',Sequence([1,True]),style='matrix',explode=False)
   params.append('point',Mapping([['x',1],['y',2]]),style='deepObject')
   assert params.get('color')==Mapping((('R','100'),('G','200'),('B','150')))
   assert params.get('id')==Scalar('5')
   assert params.get('sizes')==Sequence(('1','true'))
   assert params.render()=='.R,100,G,200,B,1505;sizes=1,truepoint%5Bx%5D=1&point%5By%5D=2'
   params = QueryParams()
   params.append('absent',Absent())
   assert params.get('absent') is ABSENT

def test_tagged_values_distinct() -> None:
   assert Sequence((('R','1'),))!=Mapping((('R','1'),))
   assert Scalar('a')!=('a',)
   assert Scalar('a')!=Sequence(('a',))
   assert Absent()!=Sequence(())
   assert Absent()==ABSENT
   assert len({Scalar('a'),Scalar('a'),Sequence(('a',))})==2

def test_duplicate_mapping_keys() -> None:
   params = QueryParams()
   with pytest.raises(ValueError):
      params.append('color',{1:'a','1':'b'},style='simple')
   with pytest.raises(ValueError):
      params.append('color',Mapping(((1,'a'),('1','b'))),style='simple')
   assert len(params)==0

def test_extend() -> None:
   params = QueryParams(PARAMS_A_STREAM)
   assert len(params)==3
   with pytest.raises(InvalidStyleCombination):
      params.extend([
         ParameterItem('more', Scalar('x'), Style.FORM, True),
         ParameterItem('bad', Scalar('x'), Style.PIPE_DELIMITED, False),
         ParameterItem('never', Scalar('x'), Style.FORM, True),
      ])
   assert len(params)==4
   assert 'never' not in params
   with pytest.raises(ValueError):
      params.extend(['color'])

def test_read_parameters_sources(params_a : dict) -> None:
   for item_a, item_b in zip(read_parameters(PARAMS_A),read_parameters(params_a)):
      assert item_a==item_b, f'Item not equal: {item_a}!={item_b}'

def test_read_parameters(params_a : dict) -> None:
   items = list(read_parameters(params_a))
   assert items==PARAMS_A_STREAM, f'Items not equal: {items}!={PARAMS_A_STREAM}'

def test_read_parameters_with_schema() -> None:
   items = list(read_parameters(PARAMS_B))
   assert items==PARAMS_B_STREAM, f'Items not equal: {items}!={PARAMS_B_STREAM}'
   assert parameters_to_query(iter(items)).render()==';color=blue,blackfilter%5BR%5D=100&filter%5BG%5D=200.x,1,y,2;empty'

def test_read_parameters_schema_argument() -> None:
   schema = SchemaParser().parse('size : simple')
   items = list(read_parameters(PARAMS_A,schema=schema))
   assert items[1]==ParameterItem('size', Scalar('large'), Style.SIMPLE, False)
   assert items[0].style==Style.FORM

def test_read_parameters_schema_file(tmp_path) -> None:
   (tmp_path / 'palette.schema').write_text("color : pipeDelimited\n")
   document = tmp_path / 'params.yaml'
   document.write_text("~schema:\n  source: palette.schema\ncolor: [blue, black]\n")
   with open(document) as input:
      query = parameters_to_query(read_parameters(input,location=str(document)))
   assert query.render()=='color=blue%7Cblack'

def test_read_parameters_errors() -> None:
   with pytest.raises(ValueError):
      list(read_parameters('- a\n- b\n'))
   with pytest.raises(ValueError):
      list(read_parameters('~unknown: 1\n'))
   with pytest.raises(ValueError):
      list(read_parameters('color:\n  ~value: blue\n  other: 1\n'))
   with pytest.raises(InvalidStyleCombination):
      list(read_parameters('color:\n  ~style: deepObject\n  ~value: blue\n'))
   assert list(read_parameters('')) == []

def test_parameters_to_query_single() -> None:
   query = parameters_to_query(ParameterItem('color', Scalar('blue'), Style.MATRIX, False))
   assert query.render()==';color=blue'
   with pytest.raises(ValueError):
      parameters_to_query('color')
