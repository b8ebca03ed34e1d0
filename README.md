# errorkit

Structured errors for Python. An `Error` carries an operation, a kind, an
optional cause and any number of ordered key-value fields. Errors nest, print
in a compact one-line-per-level form, capture a stacktrace where they are
created, and round-trip through JSON. There are no runtime dependencies.

## Install

```
pip install errorkit
```

## Creating errors

```python
from errorkit.api import e, wrap
from errorkit.kind import K

err = e("download", K.IO, OSError("disk full"), "file", "data.bin")
print(err.error_no_trace())
# op [download] kind [I/O error] file [data.bin] cause [disk full]
```

All arguments to `e` are optional. A leading plain string is the operation; a
`Kind` sets the kind; a `DefaultKind` sets the default kind; an exception
becomes the cause; the rest are key-value pairs. The keys `"op"`, `"kind"` and
`"cause"` set those parts instead of adding a field. A key without a value gets
the value `<missing>`, and `None` arguments are skipped. A single list
argument is taken as the argument list.

Errors nest, and an error without its own kind inherits the kind of its cause:

```python
outer = e("read", err)
print(outer.error_no_trace())
# op [read] kind [I/O error] cause:
# 	op [download] kind [I/O error] file [data.bin] cause [disk full]
```

`no_trace` (or `Error(...)` directly) does the same as `e` without capturing a
stacktrace. `wrap(err, *args)` turns any exception into an `Error`, or returns
it unchanged when it already is one, adding `args` as fields; it returns
`None` for `None`.

Parts can be set later with `with_op`, `with_kind`, `with_default_kind`,
`with_cause` and `with_`, each of which returns the error. `K.INVALID.default()`
gives a kind that applies only when no kind is set on the error or inherited
from its cause. The predefined kinds live on `K`: `OTHER`, `NOT_IMPLEMENTED`,
`INVALID`, `PERMISSION`, `IO`, `EXIST`, `NOT_EXIST`, `NOT_FOUND`, `FINALIZED`,
`NOT_FINALIZED`, `NO_NET_ROUTE`, `INTERNAL`, `AV_PROCESSING`, `AV_INPUT`,
`NO_MEDIA_MATCH`, `UNAVAILABLE`, `CANCELLED`, `TIMEOUT`, `WARN` and others.

## Templates

```python
from errorkit.api import template

validate = template("validate", K.INVALID)
err = validate("reason", "invalid character")
maybe = validate.if_not_nil(None)   # None
```

`t` is an alias of `template`; `template_no_trace` and `t_no_trace` make
templates whose errors carry no stacktrace. `add` extends a template with more
fields; `fields` returns its key-value pairs (without op, kind and cause) for
use elsewhere, such as in log calls; `to_json` serialises the error the
template makes on its own.

## Inspecting errors

All in `errorkit.api`:

- `is_kind(K.NOT_EXIST, err)` and `is_not_exist(err)` check the kind anywhere in the chain.
- `field(err, key)` returns a field's value, `get_field(err, key)` its text; both look through nested errors and give `None` when the field is absent.
- `match(expected, got)` compares only what the first error sets.
- `get_root(err)` returns the innermost `Error`; `get_root_cause(err)` the first nested error that is not an `Error`, or the `NilError` instance.
- `clear_stacktrace(err)` returns a copy of an `Error` without stacktraces.
- `ignore(f)` calls `f` and discards any error; `log(f, log_fn)` calls `f` and passes an error it raises or returns to `log_fn`, or prints it when `log_fn` is `None`.
- `type_of(val)` names the type of a value.

`errorkit.wrap` walks chains of any exceptions: `unwrap`, `unwrap_all`,
`is_(err, target)` and `as_(err, SomeType)`, which returns the first matching
error or `None`. `errorkit.nilerror.NilError` is a falsy error with an empty
message that stands for "no error".

## Output settings

`errorkit.error.settings`, an instance of `Settings`, holds process-wide
switches: `populate_stacktrace`, `print_stacktrace`, `print_stacktrace_pretty`,
`marshal_stacktrace`, `marshal_stacktrace_as_array`, `default_field_order` and
`separator` (the text between an error and its nested cause, by default a
newline and a tab). `format_error(print_stack, *order)` prints one error with a
given field order; an empty string in the order stands for all fields not
listed.

## JSON

```python
from errorkit.error import Error

data = err.to_json()
again = Error.from_json(data)
assert again.error_no_trace() == err.error_no_trace()
```

`to_dict` and `from_dict` do the same with dicts. A stacktrace read back from
JSON is kept in `unmarshalled_stacktrace` and is not printed.

## Error lists

```python
from errorkit.errorlist import append

errs = None
errs = append(errs, ValueError("first"))
errs = append(errs, ValueError("second"))
print(errs)
# error-list count [2]
# 	0: first
# 	1: second
```

`append` drops `None` values, flattens nested lists and returns a single error
when only one is collected. `ErrorList` has `append`, `error_or_nil`,
`to_dict`, `to_json` and `from_json`; `unmarshal_json_error_list` reads a list
back from `{"errors": [...]}`, turning objects into `Error` instances and
other values into plain errors.