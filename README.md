# auraekit

Building blocks for tools that work with an Aurae daemon:

- **`auraekit.validation`** – small field validators that raise a
  `ValidationError` naming the offending field.
- **`auraekit.config`** – loading the client configuration (TLS material and
  daemon socket) from TOML.
- **`auraekit.x509`** – reading identity details out of a client certificate.
- **`auraekit.tsgen`** – generating TypeScript client classes for runtime
  services, as a library and as the `auraekit-tsgen` command.
- **`auraekit.casing`** – identifier case conversion (`to_snake_case`,
  `to_lower_camel_case`, `to_upper_camel_case`).

## Installation

```
pip install auraekit
```

To run the test suite, install the `test` extra and run `pytest`.

## Validating fields

Every validator takes the name of the field and, optionally, the name of the
enclosing message. Nested names are joined with a dot (`field_name("cpus",
"cell")` gives `"cell.cpus"`), so errors point at the exact place in the
input. A validator that succeeds returns the value (or the converted value).

```python
from auraekit.validation import (
    RequiredError,
    ValidationError,
    minimum_value,
    required_not_empty,
)

name = required_not_empty("my-cell", "name", "cell")

try:
    minimum_value(0, 1, "cores", "cpus", "cell")
except ValidationError as exc:
    print(exc)          # Field = cell.cpus; Minimum = 1 cores
    print(exc.field)    # cell.cpus

try:
    required_not_empty("", "name", None)
except RequiredError as exc:
    print(exc)          # Field = name; Required
```

The error types are `RequiredError`, `MinimumError`, `MaximumError`,
`AllowRegexViolation` and `InvalidError`, all subclasses of
`ValidationError` (itself a `ValueError`).

| function | checks | returns |
| --- | --- | --- |
| `required(value, field_name, parent_name)` | value is not `None` | the value |
| `required_not_empty(value, field_name, parent_name)` | not `None` and non-empty | the value |
| `minimum_length(value, length, units, field_name, parent_name)` | `len(value) >= length` | the value |
| `maximum_length(value, length, units, field_name, parent_name)` | `len(value) <= length` | the value |
| `minimum_value(value, minimum, units, field_name, parent_name)` | `value >= minimum` | the value |
| `maximum_value(value, maximum, units, field_name, parent_name)` | `value <= maximum` | the value |
| `valid_enum(value, enum_type, field_name, parent_name)` | value converts to the enum | the enum member |
| `valid_json(value, field_name, parent_name)` | value parses as strict JSON | the parsed object |
| `valid_url(value, field_name, parent_name)` | value is an absolute URL | a `urllib.parse.SplitResult` |
| `allow_regex(value, pattern, field_name, parent_name)` | the pattern matches | the value |

Ready-made patterns `DOMAIN_NAME_LABEL_REGEX` and
`UNRESERVED_URL_PATH_SEGMENT_REGEX` and the unit names `UNIT_BYTES`,
`UNIT_CHARACTER`, `UNIT_CHARACTERS`, `UNIT_ITEM` and `UNIT_ITEMS` are provided
for use with these validators.

Types that validate themselves derive from `ValidatedField` and implement the
class method `validate`; they then get `validate_optional` (absent input stays
`None`) and `validate_for_creation` (a hook for stricter checks, by default
the same as `validate`).

## Client configuration

```python
from auraekit.config import AuraeConfig, ConfigError

try:
    config = AuraeConfig.try_default()
except ConfigError:
    config = AuraeConfig.parse_from_file("/path/to/config")

print(config.system.socket)
print(config.auth.ca_crt, config.auth.client_crt, config.auth.client_key)
```

`try_default` looks in these places, in order, and uses the first file that
parses; it raises `ConfigError` when none does or when `$HOME` is not set:

1. `$HOME/.aurae/config`
2. `/etc/aurae/config`
3. `/var/lib/aurae/config`

`parse_from_file` raises `ConfigError` for a missing, empty or malformed file
and for missing sections or fields. A configuration file looks like this:

```toml
[auth]
ca_crt = "/etc/aurae/pki/ca.crt"
client_crt = "/etc/aurae/pki/_signed.client.crt"
client_key = "/etc/aurae/pki/client.key"

[system]
socket = "/var/run/aurae/aurae.sock"
```

## Certificate details

```python
from auraekit.x509 import X509Details, load_client_details

with open("client.crt", "rb") as handle:
    details = X509Details.from_pem(handle.read())

print(details.subject_common_name, details.issuer_common_name)
print(details.sha256_fingerprint)   # "SHA256:" followed by the hex digest
print(details.key_algorithm)        # "RSA", "ECDSA (<curve>)" or "ED25519"

details = load_client_details(config)
```

`from_pem` raises `ValueError` when the certificate cannot be parsed or lacks
a common name or a supported key type. `load_client_details` checks that the
CA certificate, client certificate and client key named in the configuration
are readable (raising `ConfigError` otherwise) and describes the client
certificate.

## Generating TypeScript clients

`auraekit.tsgen` describes each service as a `ServiceSpec` of `FunctionSpec`
entries.

- `runtime_services()` returns the `CellService` and `PodService` of the
  `runtime` module, each with `allocate`, `free`, `start` and `stop`.
- `parse_ops_spec(text)` reads a module name and services from a text spec:

  ```
  runtime,
  {
      CellService,
      allocate(CellServiceAllocateRequest) -> CellServiceAllocateResponse,
  },
  ```

- `op_name(module, service, function)` gives the op name, e.g.
  `ae__runtime__cell_service__allocate`.
- `typescript_service(module, service)` renders one `<Service>Client` class.
- `generate_typescript(module, services, gen_dir)` appends the classes to
  `<gen_dir>/v0/<module>.ts` and writes `<gen_dir>/<module>.ts`.
- `copy_helpers(helpers_path, gen_dir)` copies a helpers script to
  `<gen_dir>/helpers.ts`.

The same is available from the command line:

```
auraekit-tsgen --help
auraekit-tsgen --gen-dir gen --helpers helpers.ts
auraekit-tsgen --gen-dir gen --spec ops.txt
```

Without `--spec` the runtime services are generated. Without `--gen-dir` the
output directory is `$CARGO_MANIFEST_DIR/gen` if that variable is set, and
`./gen` otherwise. The command prints the paths it wrote and exits with
status 1 on an error.

## What this package does not do

It does not connect to a daemon or call its services: there is no gRPC or TLS
client here. `load_client_details` only reads the authentication material and
describes it. Likewise, `auraekit.tsgen` writes TypeScript source but does not
run it.