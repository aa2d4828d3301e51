# minicp

Building blocks for a constraint programming solver, in plain Python with
no third-party dependencies.

## What is inside

- `minicp.trail`: reversible state. `Trailer` records undo actions in levels
  (`save_state()`, `restore_state()`, `with_new_state(body)`); `Trail` holds
  a value whose changes are undone when the trailer backtracks. The trailer
  only records changes once `enable()` has been called.
- `minicp.trail_list` and `minicp.trail_vec`: `TrailList`, a linked list,
  and `TrailVec`, a growable vector, whose changes roll back with the trailer.
- `minicp.heap`: `Heap`, a binary heap with a configurable order (largest
  first by default); fill it with `insert`, call `build_heap`, then
  `extract_max`.
- `minicp.hashtable`: `Hashtable`, a chained hash table whose `clear()`
  takes constant time.
- `minicp.cqueue`: `CQueue`, a growing circular queue whose entries can be
  retracted by value or through the `Location` returned by `enqueue`.
- `minicp.intrange`: `Range`, a closed integer range `[first, last]`.
- `minicp.matrix`: `Matrix`, a multi-dimensional matrix indexed as
  `m[i][j][k]`, and `build_slice`.
- `minicp.bits`: 32/64-bit word helpers (`popcount`, `mask32`,
  `rightmost_one_index64`, ...) and `floor_division` / `ceil_division`.
- `minicp.store`: `Storage`, a segmented allocator whose position is undone
  by the trailer, and `Pool`, one reset with `clear()` or to a `PoolMark`.
- `minicp.utilities`: `ValueSet`, `ValueMap` and the `MDDPropSet` bit set.
- `minicp.intvar`: `IntVar`, the abstract interface of integer variables.
- `minicp.matching`: `MaximumMatching` between variables and values, and
  `PGraph`, which yields the strongly connected components of the residual
  graph.
- `minicp.solver`: `CPSolver` with its priority queue `DEPQueue`, the
  `fixpoint()` loop, and failure signalling with `Failure` and `fail_now()`.
- `minicp.regular`: `Automaton` and `Transition` describing a finite
  automaton; `transition()` gives its table rows.
- `minicp.search`: `DFSearch`, `Branches`, `alternatives`,
  `SearchStatistics`, `land`, and variable selection heuristics
  (`first_fail`, `input_order`, `smallest`, `largest`, `random_var`).

## Reversible state

```python
from minicp.trail import Trailer, Trail

trailer = Trailer()
trailer.enable()
x = Trail(trailer, 3)
trailer.save_state()
x.value = 10
trailer.restore_state()
assert x.value == 3
```

## Depth-first search

A branching function returns the `Branches` of the current node; an empty
one marks a solution. An alternative that raises `Failure` (for example via
`fail_now()`) is counted as a failure and the search moves on.

```python
from minicp.trail import Trailer, Trail
from minicp.search import DFSearch, Branches, alternatives

trailer = Trailer()
x = Trail(trailer, None)

def choose(value):
    def alternative():
        x.value = value
    return alternative

def branching():
    if x.value is None:
        return alternatives(choose(0), choose(1))
    return Branches()

found = []
search = DFSearch(trailer, branching)   # enables the trailer
search.on_solution(lambda: found.append(x.value))
stats = search.solve()
assert found == [0, 1]
assert stats.completed
```

`solve(stats, limit)` stops early once `limit(stats)` returns true;
`optimize(objective)` calls `objective.tighten()` at every solution.

## What the package does not do

There are no concrete integer variables or domains: `IntVar` is only an
interface, to be implemented by the user. There are no ready-made
constraints either: `CPSolver` schedules and propagates any object offering
`post()`, `propagate()` and the flags it reads, and `Automaton` describes an
automaton without posting a constraint from it. There is no command-line
program.

## Running the tests

```
pip install -e .[test]
pytest
```