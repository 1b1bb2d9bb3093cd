"""Output formats for assessment reports: markdown, SARIF, NDJSON history and events."""