# reactlens

Building blocks for interactive programs built around immutable values.

- **Lenses** (`reactlens.lenses`): composable getters and setters over nested
  data. Build them with `attr`, `item` or `getset`, join them with `|`, and
  use them through `view`, `put` and `over`.
- **Signals** (`reactlens.signal`): callback lists (`Signal`) with
  `Connection` handles, and `Forwarder` objects that relay one signal into
  another.
- **Nodes** (`reactlens.nodes`): a dataflow graph of state, sensor,
  transducer, lens and merge nodes. Values are staged with `send_up` or
  `push_down`, made visible with `send_down`, and observers are told with
  `notify`. Transducers are built with `mapping`, `filtering`, `comp` and
  `update`.
- **Watching** (`reactlens.watchable`): `Watchable.watch`, `bind`, `nudge`
  and `unbind`, and the `watch` function.
- **Cursors** (`reactlens.cursors`): `Reader`, `Cursor`, `State`/`make_state`
  and `Sensor`/`make_sensor`. Derive values with `map`, `filter`, `zoom`,
  `xform` or `[]`, and combine several with `with_`; call `make` on the
  result to get a reader or cursor.
- **Enums** (`reactlens.enums`): `to_string` and `to_enum` convert between
  enumeration members and their names, raising `ValueError` for unknown ones.
- **Snake** (`reactlens.snake`): a small snake game model written in this
  style, with `make_initial` and a pure `update` function.

## Installing

```
pip install .
```

## Lenses

```python
from reactlens.lenses import attr, item, view, put, over

month = attr("birthday") | attr("month")
view(month, person)                   # read the value
put(month, person, 6)                 # a copy with a new value
over(month, person, lambda m: m - 1)  # a copy with a changed value
view(item(0), [1, 2, 3])              # 1
```

Dataclasses are updated with `dataclasses.replace`, named tuples with
`_replace`, tuples are rebuilt, and other objects are shallow-copied before
the change, so the original value is left untouched.

## Cursors

```python
from reactlens.cursors import make_state
from reactlens.nodes import Tag
from reactlens.watchable import watch

counter = make_state(0, Tag.AUTOMATIC)
doubled = counter.map(lambda x: x * 2).make()
watch(doubled, print)
counter.set(21)     # prints 42
```

A state created with `Tag.AUTOMATIC` commits and notifies as soon as it is
written. With the default `Tag.TRANSACTIONAL`, written values are only
staged; at the node level, `send_down` makes them visible and `notify` calls
the observers:

```python
from reactlens.nodes import make_state_node, make_xform_reader_node, mapping

x = make_state_node(5)
y = make_xform_reader_node(mapping(lambda v: v + 1), (x,))
x.send_up(41)
y.last()        # still 6
x.send_down()
y.last()        # 42
```

## Snake

```python
from reactlens.snake import make_initial, update, Action

model = make_initial(42)
model = update(model, Action.GO_UP)
model = update(model, Action.TICK)
model.game.over
```

## What it does not do

There is no store, event loop or action dispatcher here: update functions
such as `reactlens.snake.update` are pure, and the caller feeds actions to
them and writes the results into a `State` itself. The snake model has no
screen or input handling of its own.

## Running the tests

```
pip install .[test]
pytest
```