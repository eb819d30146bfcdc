# blueprint/catalog.py - Dockerfile instruction catalog
# -----------------------------------------------------
# Static registry of the instructions the editor knows about:
#  - Instruction enum (one member per Dockerfile keyword)
#  - InstructionSpec entries with labels, defaults and docs
#  - Several specs may share a keyword (multi-stage FROM, COPY --from, ...)
# -----------------------------------------------------

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Instruction(str, Enum):
    FROM = "FROM"
    RUN = "RUN"
    CMD = "CMD"
    LABEL = "LABEL"
    EXPOSE = "EXPOSE"
    ENV = "ENV"
    ADD = "ADD"
    COPY = "COPY"
    ENTRYPOINT = "ENTRYPOINT"
    VOLUME = "VOLUME"
    USER = "USER"
    WORKDIR = "WORKDIR"
    ARG = "ARG"
    ONBUILD = "ONBUILD"
    STOPSIGNAL = "STOPSIGNAL"
    HEALTHCHECK = "HEALTHCHECK"
    SHELL = "SHELL"


# Raw token -> canonical instruction. MAINTAINER is deprecated upstream and
# imported as a LABEL.
_TOKEN_MAP = {member.value: member for member in Instruction}
_TOKEN_MAP["MAINTAINER"] = Instruction.LABEL


def resolve_instruction(token: str) -> Optional[Instruction]:
    """Map a raw instruction token to its canonical keyword, or None."""
    if not token:
        return None
    return _TOKEN_MAP.get(token.strip().upper())


@dataclass(frozen=True)
class InstructionSpec:
    id: str
    keyword: Instruction
    label: str
    description: str
    default_arguments: str = ""
    examples: Tuple[str, ...] = ()
    documentation: str = ""
    advanced: bool = False


CATALOG: Tuple[InstructionSpec, ...] = (
    InstructionSpec(
        "from", Instruction.FROM, "FROM", "Set the base image",
        "node:14-alpine",
        ("FROM ubuntu:20.04", "FROM node:14-alpine"),
        "Specifies the base image of the build. Must be the first instruction of the Dockerfile.",
    ),
    InstructionSpec(
        "run", Instruction.RUN, "RUN", "Run a command",
        "apt-get update && apt-get install -y curl",
        ("RUN apt-get update", "RUN npm install"),
        "Executes a command on top of the current image, usually to install packages.",
    ),
    InstructionSpec(
        "copy", Instruction.COPY, "COPY", "Copy files",
        ". /app",
        ("COPY . /app", "COPY package.json /app/"),
        "Copies files from the build context into the image.",
    ),
    InstructionSpec(
        "add", Instruction.ADD, "ADD", "Add files",
        ". /app",
        ("ADD . /app", "ADD package.json /app/"),
        "Like COPY, but also accepts URLs and unpacks tar archives.",
    ),
    InstructionSpec(
        "workdir", Instruction.WORKDIR, "WORKDIR", "Set the working directory",
        "/app",
        ("WORKDIR /app", "WORKDIR /var/www/html"),
        "Sets the working directory for the instructions that follow.",
    ),
    InstructionSpec(
        "env", Instruction.ENV, "ENV", "Set environment variables",
        "NODE_ENV=production",
        ("ENV NODE_ENV=production", "ENV PORT=3000"),
        "Sets environment variables available both during the build and at runtime.",
    ),
    InstructionSpec(
        "expose", Instruction.EXPOSE, "EXPOSE", "Expose a port",
        "3000",
        ("EXPOSE 80", "EXPOSE 3000"),
        "Declares the ports the container listens on at runtime.",
    ),
    InstructionSpec(
        "cmd", Instruction.CMD, "CMD", "Set the default command",
        '["node", "server.js"]',
        ('CMD ["node", "server.js"]', 'CMD ["npm", "start"]'),
        "Default command run when the container starts; overridden by docker run arguments.",
    ),
    InstructionSpec(
        "entrypoint", Instruction.ENTRYPOINT, "ENTRYPOINT", "Set the entrypoint",
        '["node", "server.js"]',
        ('ENTRYPOINT ["node", "server.js"]', 'ENTRYPOINT ["npm", "start"]'),
        "Command run when the container starts; not overridden by docker run arguments.",
    ),
    InstructionSpec(
        "volume", Instruction.VOLUME, "VOLUME", "Create a mount point",
        "/data",
        ("VOLUME /data", 'VOLUME ["/data", "/app/logs"]'),
        "Creates a mount point for volumes from the host or other containers.",
    ),
    InstructionSpec(
        "user", Instruction.USER, "USER", "Set the user",
        "node",
        ("USER node", "USER www-data"),
        "Sets the user and group used by the instructions that follow.",
    ),
    InstructionSpec(
        "label", Instruction.LABEL, "LABEL", "Add metadata",
        'version="1.0" maintainer="name@example.com"',
        ('LABEL version="1.0"', 'LABEL maintainer="name@example.com"'),
        "Adds key-value metadata to the image.",
    ),
    InstructionSpec(
        "arg", Instruction.ARG, "ARG", "Define a build argument",
        "NODE_VERSION=14",
        ("ARG NODE_VERSION=14", "ARG PORT=3000"),
        "Defines a build-time variable that can be passed with --build-arg.",
    ),
    InstructionSpec(
        "healthcheck", Instruction.HEALTHCHECK, "HEALTHCHECK", "Health check",
        "--interval=5m --timeout=3s CMD curl -f http://localhost/ || exit 1",
        ("HEALTHCHECK --interval=5m --timeout=3s CMD curl -f http://localhost/ || exit 1",),
        "Tells Docker how to check that the container is still working.",
    ),
    InstructionSpec(
        "multi_stage", Instruction.FROM, "FROM (multi-stage)",
        "Multi-stage build, keeps the final image small",
        "node:14-alpine AS build-stage",
        ("FROM node:14-alpine AS build-stage", "FROM nginx:alpine AS production-stage"),
        "Starts a named build stage whose files later stages can copy from.",
        advanced=True,
    ),
    InstructionSpec(
        "copy_from", Instruction.COPY, "COPY --from", "Copy files from another stage",
        "--from=build-stage /app/dist /usr/share/nginx/html",
        ("COPY --from=build-stage /app/dist /usr/share/nginx/html",),
        "Copies files from another stage of a multi-stage build into the current stage.",
        advanced=True,
    ),
    InstructionSpec(
        "shell", Instruction.SHELL, "SHELL", "Set the default shell",
        '["powershell", "-command"]',
        ('SHELL ["powershell", "-command"]', 'SHELL ["/bin/bash", "-c"]'),
        "Sets the shell used by the shell form of RUN, CMD and ENTRYPOINT.",
        advanced=True,
    ),
    InstructionSpec(
        "stopsignal", Instruction.STOPSIGNAL, "STOPSIGNAL", "Set the stop signal",
        "SIGTERM",
        ("STOPSIGNAL SIGTERM", "STOPSIGNAL 9"),
        "Sets the system call signal sent to the container to make it exit.",
        advanced=True,
    ),
    InstructionSpec(
        "onbuild", Instruction.ONBUILD, "ONBUILD", "Trigger instruction",
        "RUN npm install",
        ("ONBUILD RUN npm install", "ONBUILD COPY . /app"),
        "Instruction executed in downstream builds that use this image as their base.",
        advanced=True,
    ),
    InstructionSpec(
        "healthcheck_disable", Instruction.HEALTHCHECK, "HEALTHCHECK NONE",
        "Disable the health check",
        "NONE",
        ("HEALTHCHECK NONE",),
        "Disables any health check inherited from the base image.",
        advanced=True,
    ),
    InstructionSpec(
        "volume_from", Instruction.VOLUME, "VOLUME (shared)", "Configure a shared volume",
        '["/shared-data"]',
        ('VOLUME ["/shared-data", "/config"]',),
        "Creates a persistent volume that several containers can share.",
        advanced=True,
    ),
    InstructionSpec(
        "copy_chown", Instruction.COPY, "COPY --chown", "Copy and set ownership",
        "--chown=node:node . /app",
        ("COPY --chown=node:node . /app",),
        "Copies files into the container and sets their user and group.",
        advanced=True,
    ),
)

_BY_ID = {spec.id: spec for spec in CATALOG}


def find_spec_by_id(spec_id: str) -> Optional[InstructionSpec]:
    return _BY_ID.get(spec_id)


def find_spec_by_keyword(keyword: Union[Instruction, str]) -> Optional[InstructionSpec]:
    """Return the first catalog entry for ``keyword``.

    Strings are resolved through the token table first, so aliases such as
    MAINTAINER find the LABEL entry and unknown keywords return None.
    """
    if not isinstance(keyword, Instruction):
        keyword = resolve_instruction(keyword)
        if keyword is None:
            return None
    for spec in CATALOG:
        if spec.keyword is keyword:
            return spec
    return None


def list_specs(include_advanced: bool = True):
    return [s for s in CATALOG if include_advanced or not s.advanced]
