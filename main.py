from dataclasses import dataclass, field

from rich.pretty import pprint

from cmdbind import *
from cmdbind.logs import setup_logger


@dataclass
class Listen:
    host: str = option("interface to bind", default="127.0.0.1")
    port: str = option("port to listen on", required="true")


@dataclass
class HttpOptions:
    listen: Listen = field(default_factory=Listen)
    tls_cert_file: str = option("certificate enabling https")


def http(invocation):
    pprint(invocation)


app = Command("app", children=[
    Command("serve", children=[
        Command("http", HttpOptions, action=http),
    ]),
], shell=True, fancy=True, colorful=True)


if __name__ == '__main__':
    setup_logger("DEBUG")
    invoke(app)
