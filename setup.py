# -*- coding: utf-8 -*-
from setuptools import setup

packages = \
['algolib',
 'algolib.ledger_algorand',
 'algolib.ledger_algorand.exception',
 'algolib.ledger_algorand.ledgercomm',
 'algolib.ledger_algorand.ledgercomm.interfaces']

install_requires = \
['hidapi>=0.14.0',
 'semver>=3.0.1,<4.0.0',
 'typing-extensions>=4.4,<5.0']

setup_kwargs = {
    'name': 'algorand-ledger',
    'version': '0.3.0',
    'description': 'Host library for the Algorand application on Ledger hardware wallets',
    'long_description': "# Algorand Ledger\n\nA Python library for driving the Algorand application of a Ledger device: transaction signing, arbitrary data signing, address and version queries.\nIt talks to a device over USB HID, or to the Speculos emulator over TCP.\n\n## Install\n\n```\npip3 install .\n```\n\n## Usage\n\n```\nfrom algolib.ledger import AlgorandLedgerClient\n\nclient = AlgorandLedgerClient('tcp:127.0.0.1:9999')\nprint(client.get_address_and_pubkey(0))\n```\n\n## Tests\n\n```\ncd test\npython3 -m unittest\n```\n",
    'long_description_content_type': 'text/markdown',
    'packages': packages,
    'install_requires': install_requires,
    'python_requires': '>=3.8,<3.14',
}


setup(**setup_kwargs)
