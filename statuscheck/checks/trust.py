from __future__ import annotations

import ssl
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter

from statuscheck.models import CheckOptions

# Private CA trusted for every verified check, on top of the system roots.
EMBEDDED_CA_PEM = """\
-----BEGIN CERTIFICATE-----
MIIErzCCAxegAwIBAgIBATANBgkqhkiG9w0BAQsFADBCMSAwHgYDVQQKDBdMRU5O
T1hDT05TVUxUSU5HLkNPTS5BVTEeMBwGA1UEAwwVQ2VydGlmaWNhdGUgQXV0aG9y
aXR5MB4XDTIxMDcxOTEwMjYwMFoXDTQxMDcxOTEwMjYwMFowQjEgMB4GA1UECgwX
TEVOTk9YQ09OU1VMVElORy5DT00uQVUxHjAcBgNVBAMMFUNlcnRpZmljYXRlIEF1
dGhvcml0eTCCAaIwDQYJKoZIhvcNAQEBBQADggGPADCCAYoCggGBALZ5ZJci3Dcf
7JV4ln1RPX1XB4Jz8EwxvaDFUVMOuEEeLD5FCU2tpBK99B3cQnt6ZEn5VkMaa+zK
P2YnIxp7jmRaDudiq7oX5LBXNhypw84wfJTjk2W6bBrdyJx9GCs8Ii2cGX/IDIh5
1ARp1N0VRaxIE/ooJXuB9zl+8I6DXB6wLLQokD0mCXAMb8ALVFqEL6hc+3EOPdIC
jbouGHZlK/pyCThKe16VfBRiysNwaqJaBLUJtR5PBLVWM4aa6J0AO2aJt5hLqcGu
zX69iqIuRt9pR2u6M6VRwBj50XVaFwxYf5cg8qlsGIUIb24kfzy2Oj+84fLuBmH1
2E2KX86HCpfqgc8qzitn39spuz6BBeldDwglGnORd+rOHYrU0IhcGjU1zgN4jAnk
fVCjJ3hD7jC5BbLgY1kGD51l4WvoTlyNgxabLRq6JguIYs/J1NIuYf1X6zI21Q3V
wWXNFpziR5MM0j8/E1hVsr0HcPV4plCjCKeXcP9locnQ0pmMtDnH1wIDAQABo4Gv
MIGsMB8GA1UdIwQYMBaAFDEKkwYTZEDHyMK6jv9Bl/B/UT5RMA8GA1UdEwEB/wQF
MAMBAf8wDgYDVR0PAQH/BAQDAgHGMB0GA1UdDgQWBBQxCpMGE2RAx8jCuo7/QZfw
f1E+UTBJBggrBgEFBQcBAQQ9MDswOQYIKwYBBQUHMAGGLWh0dHA6Ly9pcGEtY2Eu
bGVubm94Y29uc3VsdGluZy5jb20uYXUvY2Evb2NzcDANBgkqhkiG9w0BAQsFAAOC
AYEAeQ9HRxbA0Usen46utV1bmEEAcHrlg0x4R8sPIfHY9X0PMGd8l9ukobc7Wdj/
60rMmbnNp0NePfnDNJFCkOoCfhPk4XFsAdHnxMGUuxbxrFvA2prdhv58BTcJh8xG
+IWgOv9svw7VZUrihRIosIoG/cTyxFlGuxCAThqkNdV7mOwNbkNFWO2zt37lwWVD
leoW5zNPZfJDIvPANZsukygNPbOwCjA3zvOi9OUDB0g3ZHNgVuksN3W7YF/SjqnB
dfwy0M/X53DVF+5gEv1P+6SEqFWqqNtRfrRwiUKUD2kb3cwyoawOCaRgBdeWWgcQ
Zrql6+sxG71ZrLAP8c2mCcw/+dw+gJ/qZEuMYXONdmraeYCVB8YLKlZ5HjWig45m
f3Gi/6qZYxX/d/1BX1cmZFG0CychEhoP/3UY4WKX8AhIq/gCE/IgPdQZmcoug6ks
YhoekjRiO5ZNG4e2jyF6L6407PmErlwJ5ubFl/SODkKR/mvEIZ6j9fN2v70rvc/x
AyTb
-----END CERTIFICATE-----
"""


def load_ca_pem(path: str | None) -> str:
    if not path:
        return EMBEDDED_CA_PEM
    ca_path = Path(path)
    if not ca_path.exists():
        raise FileNotFoundError(f"Missing CA file at {ca_path}")
    return ca_path.read_text()


def build_ssl_context(ca_pem: str | None) -> ssl.SSLContext:
    """System default trust store, plus ``ca_pem`` when given."""
    ctx = ssl.create_default_context()
    if ca_pem:
        ctx.load_verify_locations(cadata=ca_pem)
    return ctx


class TrustStoreAdapter(HTTPAdapter):
    """HTTPAdapter whose connection pools verify against a fixed SSLContext."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs) -> None:
        # HTTPAdapter.__init__ calls init_poolmanager, so this must be set first
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["ssl_context"] = self._ssl_context
        return super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["ssl_context"] = self._ssl_context
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def build_session(options: CheckOptions, ca_pem: str | None) -> requests.Session:
    session = requests.Session()
    session.max_redirects = options.max_redirects
    if options.enable_insecure:
        session.verify = False
    else:
        session.mount("https://", TrustStoreAdapter(build_ssl_context(ca_pem)))
    return session
