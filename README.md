# intsoc

`intsoc` is a toolkit for Internet-Drafts and RFC documents. It reads RFC XML v3
sources and plain-text drafts, runs a set of checks on them, works out fixes and
applies the ones that can be applied to the text, tracks a document through the
IETF lifecycle states, and looks documents up on the IETF Datatracker and IANA
registries. Its stream model covers the IETF, IRTF, IAB, Independent, IANA and
RFC Editor streams.

Python 3.10 or later is required.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `intsoc` command:

```
intsoc check draft-example-00.xml            # report issues in a document
intsoc check --errors-only draft.xml         # errors and fatal findings only
intsoc fix draft.xml --dry-run               # show the unified diff of the fixes
intsoc fix draft.xml --auto-only -o out.xml  # apply only AutoSafe fixes
intsoc submit draft.xml                      # run pre-submission checks
intsoc status draft-example-foo              # look a draft up on the Datatracker
intsoc init draft-example-foo --stream wg --group httpbis --dir .
```

Global options are `-v/--verbose` (debug logging) and `-f/--format text|json`.
They may be given before or after the subcommand name, for example
`intsoc --format json check draft.xml` or `intsoc check draft.xml --format json`.
`check` and `status` print JSON when the format is `json`.

- `check` parses the file and reports missing boilerplate, title, authors,
  abstract or draft name, a draft name not starting with `draft-`, a
  non-default IPR declaration, and (for XML) a missing category. It prints a
  summary and `PASS` or `FAIL`.
- `fix` plans fixes for those findings, applies them (or only the AutoSafe ones
  with `--auto-only`) and writes the result back to the file or to `--output`.
  With `--dry-run` it prints a unified diff instead of writing.
- `submit` runs the checks (unless `--skip-checks`) and reports where the
  document would be submitted.
- `status` prints the Datatracker's metadata for a draft, or says it was not
  found.
- `init` writes `<name>.xml` into `--dir`. Stream types are `individual`, `wg`,
  `irtf`, `iab` and `independent`; `wg` and `irtf` require `--group`. If the
  directory holds a `nickel/` workspace with a template for the stream, the
  template is rendered with the external `nickel` program; if that is missing
  or rendering fails, a built-in RFC XML v3 skeleton is written.

Errors are printed as `Error: ...` and the command exits with status 1.

## Library use

Parsing picks XML or plain text from the first characters of the source:

```python
from intsoc.parser import parse

with open("draft-example-00.xml", encoding="utf-8") as fh:
    document = parse(fh.read())

print(document.name, document.stream, document.stream.organization())
```

Checking and fixing:

```python
from intsoc.commands import run_checks
from intsoc.diff import unified_diff
from intsoc.engine import FixEngine
from intsoc.validation import CheckSummary

results = run_checks(document)
summary = CheckSummary.from_results(results)
print("passes:", summary.passes(), "errors:", summary.error_count)

engine = FixEngine()
plan = engine.plan(document, results)
fixed = engine.apply_auto_safe(document.source, plan)
print(unified_diff(document.source, fixed, "draft-example-00.xml"))
```

Fixes are classified by `intsoc.validation.Fixability` as `AUTO_SAFE`,
`RECOMMENDED`, `MANUAL_ONLY` or `NOT_FIXABLE`; a `FixPlan` picks them out with
`auto_safe_fixes()`, `recommended_fixes()` and `manual_only_fixes()`.
`intsoc.diff` also offers `inline_diff` and `change_count`.

Parsing `idnits` output into the same result type:

```python
from intsoc.idnits import parse_idnits_output

for result in parse_idnits_output(report_text):
    print(result.severity, result.category, result.message)
```

Tracking a document through the IETF states:

```python
from intsoc.state import IetfState, StateMachine

machine = StateMachine()
machine.transition(IetfState.IDNITS_CHECK, "nits clean")
print(machine.current, machine.available_transitions())
```

An illegal move raises `intsoc.state.InvalidTransitionError`.

Looking drafts up on the Datatracker (the clients are asynchronous):

```python
import asyncio

from intsoc.datatracker import DataTrackerClient


async def lookup() -> None:
    async with DataTrackerClient() as client:
        info = await client.get_draft("draft-ietf-httpbis-brotli")
        print(info.title, info.rev)
        print(await client.is_name_available("draft-example-unused"))


asyncio.run(lookup())
```

`intsoc.iana.IanaClient.get_registry` works the same way for IANA registries.
A missing document raises `intsoc.errors.NotFoundError`; other failures raise
subclasses of `intsoc.errors.ApiError`. Every error the package raises derives
from `intsoc.errors.IntsocError`.

`intsoc.policy.check_policy(workspace, document)` checks a document's title,
authors, abstract and group against built-in rules; it requires
`policies/stream-rules.ncl` to exist in the `NickelWorkspace` but does not
evaluate it.

## What it does not do

- It does not submit documents. `submit` only runs the checks and points to
  the Datatracker's manual submission page.
- Fixes that target XML paths (setting attributes, inserting sections or
  elements) are planned and listed but not applied to the source; applying
  them leaves the text unchanged and logs a warning. Only line and text
  replacements, insertions and deletions change the source.
- It does not validate XML against the RFC XML schema, and it has no
  graphical interface.
- Rendering and type-checking Nickel templates needs the `nickel` program on
  the `PATH`.