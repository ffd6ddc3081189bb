"""Starter configuration written by ``impact init``."""

import json
from typing import Literal

YAML_TEMPLATE = """\
# Impact Analyzer configuration

repos:
  - name: frontend
    path: ./frontend
    type: angular
    analyzers:
      - ts-morph
    # include_paths:
    #   - src/app
    # exclude_paths:
    #   - "**/*.spec.ts"

  # - name: api
  #   path: ./api
  #   type: graphql-node
  #   analyzers:
  #     - graphql-inspector

  # - name: lambdas
  #   path: ./lambdas
  #   type: go
  #   analyzers:
  #     - go-ast

relations: []
  # - from: api
  #   to: frontend
  #   via: graphql-schema
  #   patterns:
  #     - "**/*.graphql"

output:
  directory: ./impact-output
  formats:
    - json
    - markdown

logging:
  level: INFO
"""


def render_template(fmt: Literal["yaml", "json"] = "yaml") -> str:
    """Return the starter config in the requested format."""
    if fmt == "yaml":
        return YAML_TEMPLATE

    return (
        json.dumps(
            {
                "repos": [
                    {
                        "name": "frontend",
                        "path": "./frontend",
                        "type": "angular",
                        "analyzers": ["ts-morph"],
                    }
                ],
                "relations": [],
                "output": {"directory": "./impact-output", "formats": ["json", "markdown"]},
            },
            indent=2,
        )
        + "\n"
    )


def template_filename(fmt: Literal["yaml", "json"] = "yaml") -> str:
    """Default file name for a freshly initialized config."""
    return "impact.config.json" if fmt == "json" else "impact.config.yaml"
