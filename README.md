# powerai

`powerai` is a set of helpers for services that run as AI agents. It holds the key layout those services use in their configuration registry, and a number of general utilities.

## Modules

- `powerai.keys` builds registry key paths for service instances, system configuration and agent configuration. It also builds the URLs used to reach other agents, and it parses single lines from an agent's streamed response (`parse_agent_response`).
- `powerai.cache.Cache` is a dictionary guarded by a lock. It can be shared between threads.
- `powerai.envvars` reads environment variables as strings, integers or booleans, each with a default. It can also find a local IPv4 address (`get_internal_ip`).
- `powerai.uid.uuid_hex` returns a random UUID as 32 hex digits.
- `powerai.aescbc` does AES-CBC encryption and decryption with a base64 key.
- `powerai.casing` converts case (camel, snake, kebab, upper variants), pads strings and splits words.
- `powerai.strutil` has general string helpers: base64, text before and after separators, trimming, wrapping, rotating, template replacement, searching and Hamming distance.
- `powerai.datetimes` does date arithmetic, finds the start and end of minutes, hours, days, weeks, months and years, formats and parses named layouts such as `yyyy-mm-dd hh:mm:ss`, and parses durations such as `1h30m`. Its `UnixTime` value converts between timestamps and strings.
- `powerai.files` covers existence checks, copying and removal, line reading (`FileReader`), hashing, content-type sniffing, and reading and writing CSV.
- `powerai.jsonpath` reads and edits JSON documents by dotted path (`get`, `get_many`, `set_value`, `set_raw`, `delete`, `valid`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Keys and URLs

```python
from powerai import keys

keys.system_config_full_key("", "powermop_db")
# '/system/config/_internal_/default/powermop_db'

keys.agent_send_msg_url("10.0.0.5:8080", "power-ai-decision")
# 'http://10.0.0.5:8080/power/ai/decision/send_msg'

keys.parse_agent_response(b'data:{"answer": 1}')
# ('{"answer": 1}', False)

keys.parse_agent_response(b"[Done]")
# ('', True)
```

### JSON paths

```python
from powerai import jsonpath

doc = '{"choices": [{"message": {"content": "hi"}}]}'
jsonpath.get(doc, "choices.0.message.content").string()   # 'hi'
jsonpath.set_value(doc, "choices.0.message.content", "bye")
# '{"choices":[{"message":{"content":"bye"}}]}'
```

### Strings and dates

```python
from powerai import casing, datetimes

casing.snake_case("fooBarBaz")      # 'foo_bar_baz'
datetimes.is_leap_year(2024)        # True
```

### Encryption

```python
import base64
from powerai import aescbc

encoded = base64.b64encode(bytes(16)).decode()   # a made-up 16-byte key
ciphertext = aescbc.encrypt_cbc("hello", encoded)
aescbc.decrypt_cbc(ciphertext, encoded)          # b'hello'
```

The AES helpers pad with zero bytes and use the first block of the key as the IV. Decryption strips every trailing zero byte. These helpers exist so that data already stored this way can still be read. They are not a recommended scheme.

## What the package does not do

The package does not send network requests. It has no HTTP client and no calls to chat, embedding, rerank or speech models. `powerai.keys` only builds the keys and URLs such calls would use. The package also has no zip archive helpers, no logging setup, no agent server and no registry client.