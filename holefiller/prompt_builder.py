"""Hole-filler prompt rendering.

The model sees a document with a single hole marked by FILL_SENTINEL and is
asked to answer with the replacement wrapped in COMPLETION tags.
"""

FILL_SENTINEL = "{{FILL_HERE}}"
COMPLETION_OPEN_TAG = "<COMPLETION>"
COMPLETION_CLOSE_TAG = "</COMPLETION>"

SYSTEM_INSTRUCTION = "You are a HOLE FILLER."

HOLE_FILLER_TEMPLATE = """\
You are a HOLE FILLER. You are provided with a file containing holes, \
formatted as '{{HOLE_NAME}}'. Your TASK is to complete with a string to \
replace this hole with, inside a <COMPLETION/> XML tag, including \
context-aware indentation, if needed. All completions MUST be truthful, \
accurate, well-written and correct.

## EXAMPLE QUERY:

<QUERY>
function sum_evens(lim) {
  var sum = 0;
  for (var i = 0; i < lim; ++i) {
    {{FILL_HERE}}
  }
  return sum;
}
</QUERY>

TASK: Fill the {{FILL_HERE}} hole.

## CORRECT COMPLETION

<COMPLETION>if (i % 2 === 0) {
      sum += i;
    }</COMPLETION>

## EXAMPLE QUERY:

<QUERY>
def sum_list(lst):
  total = 0
  for x in lst:
  {{FILL_HERE}}
  return total

print(sum_list([1, 2, 3]))
</QUERY>

## CORRECT COMPLETION:

<COMPLETION>  total += x</COMPLETION>

## EXAMPLE QUERY:

<QUERY>
// data Tree a = Node (Tree a) (Tree a) | Leaf a

// sum :: Tree Int -> Int
// sum (Node lft rgt) = sum lft + sum rgt
// sum (Leaf val)     = val

// convert to TypeScript:
{{FILL_HERE}}
</QUERY>

## CORRECT COMPLETION:

<COMPLETION>type Tree<T>
  = {$:"Node", lft: Tree<T>, rgt: Tree<T>}
  | {$:"Leaf", val: T};

function sum(tree: Tree<number>): number {
  switch (tree.$) {
    case "Node":
      return sum(tree.lft) + sum(tree.rgt);
    case "Leaf":
      return tree.val;
  }
}</COMPLETION>

## EXAMPLE QUERY:

The 5th {{FILL_HERE}} is Jupiter.

## CORRECT COMPLETION:

<COMPLETION>planet from the Sun</COMPLETION>

## EXAMPLE QUERY:

function hypothenuse(a, b) {
  return Math.sqrt({{FILL_HERE}}b ** 2);
}

## CORRECT COMPLETION:

<COMPLETION>a ** 2 + </COMPLETION>"""

CLOSING_INSTRUCTION = (
    f"TASK: Fill the {FILL_SENTINEL} hole. Answer only with the CORRECT "
    "completion, and NOTHING ELSE. Do it now."
)


def split_at_cursor(window_text: str, cursor_offset: int) -> tuple[str, str]:
    """Split the window into the text before and after the cursor.

    Everything up to the last newline belongs to the prefix; the final line
    is cut at `cursor_offset`.
    """
    last_break = window_text.rfind("\n")
    head = window_text[: last_break + 1]
    last_line = window_text[last_break + 1 :]
    return head + last_line[:cursor_offset], last_line[cursor_offset:]


def render_query(prefix: str, suffix: str = "") -> str:
    return f"<QUERY>\n{prefix}{FILL_SENTINEL}{suffix}\n</QUERY>"


def build(window_text: str, cursor_offset: int, suffix_text: str = "") -> str:
    prefix, suffix = split_at_cursor(window_text, cursor_offset)
    return (
        HOLE_FILLER_TEMPLATE
        + "\n\n"
        + render_query(prefix, suffix + suffix_text)
        + "\n"
        + CLOSING_INSTRUCTION
        + "\n"
        + COMPLETION_OPEN_TAG
    )
