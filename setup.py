"""
1. pip3 install setuptools
2. python3 setup.py build
3. sudo python3 setup.py install
"""

from setuptools import setup, find_packages
setup(
    name='edgenceOutPoint',
    version='0.1.0',
    url='https://github.com/EdgeIntelligenceChain/EdgenceChain',
    install_requires=['base58>=2.0.0', 'ecdsa>=0.14'],
    extras_require={'test': ['pytest>=7.0.0']},
    python_requires='>=3.7',
    packages=find_packages(exclude=['tests', 'tests.*'])
  )
