""" Small is beautiful. These algorithms need no introduction. """

from collections import deque

def allocate(a_list:list, item):
	"""
	Append an item to a list, and return the new item's index in that list.
	Every task, resource and scenario gets its index in its property set this way.
	"""
	idx = len(a_list)
	a_list.append(item)
	return idx

def transitive_closure(roots, successors) -> set:
	"""
	Transitive closure is a simple application of graph search.
	(This particular implementation is breadth-first.)

	This function does not expect any particular data structure.
	Rather, it takes the graph's outbound-edge relation as a callable parameter.
	It requires:
		``roots`` is an iterable of nodes;
		each node is hashable;
		and ``successors(aNode)`` returns an iterable of nodes, or None.
	"""
	closure = set(roots)
	queue = deque(closure)
	while queue:
		more = successors(queue.popleft())
		if more is not None:
			for item in more:
				if item not in closure:
					closure.add(item)
					queue.append(item)
	return closure

def fixed_point(initial:set, grow) -> set:
	"""
	Keep calling ``grow(current)`` until it stops adding members.
	``grow`` returns an iterable of candidates; the result is the least fixed point containing ``initial``.
	"""
	result = set(initial)
	while True:
		before = len(result)
		result.update(grow(result))
		if len(result) == before: return result
