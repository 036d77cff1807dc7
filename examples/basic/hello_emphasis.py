"""Parse and render emphasis in 3 lines, zero config, zero deps."""

from realce import parse, render

nodes = parse("_foo *bar_ baz*")
html = render(nodes)
print(html)
