"""
SubwayMap Backend - Build Script

This script packages the subway map service (graph, pathfinding, fare, map cache, favorites).
"""

from setuptools import setup, find_namespace_packages


setup(
    name='subway-map',
    version='1.0.0',
    author='SubwayMap Team',
    author_email='team@subwaymap.dev',
    description='Subway network map, shortest path and fare service',
    long_description='''
    Subway network service: line/station/edge management, a cached map
    snapshot with ETag fingerprints, Dijkstra shortest path by distance or
    duration with distance-based fares, and per-user favorite stations/paths.
    ''',
    packages=find_namespace_packages(include=['app', 'app.*']),
    install_requires=[
        'fastapi>=0.100.0',
        'uvicorn>=0.23.0',
        'pydantic>=2.0',
        'python-dotenv>=1.0.0',
        'python-jose[cryptography]>=3.3.0',
        'redis>=4.5.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-mock>=3.10',
            'httpx>=0.24',
        ],
    },
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: GIS',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
