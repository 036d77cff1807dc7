"""Free-threading safe: parse 1000 inline contents in parallel."""

from concurrent.futures import ThreadPoolExecutor

from realce import parse, to_json

sources = [f"Item {i}: *bold {i}* and _em {i}_" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parse, sources))

print(f"Parsed {len(results)} contents in parallel")
print("First result as JSON:", to_json(results[0])[:80], "...")
