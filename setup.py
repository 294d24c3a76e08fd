from setuptools import setup, find_packages

setup(
    name='speech-analytics',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    python_requires='>=3.11',
    install_requires=[
        'colored==2.2.3',
        'halo==0.0.31',
    ],
    extras_require={
        'test': ['pytest>=7.4'],
    },
    entry_points='''
        [console_scripts]
        speech-analytics=speech_analytics.__main__:main
    ''',
    author='Juan Sugg',
    author_email='juanpedrosugg@gmail.com',
    license='MIT',
    keywords='speech recognition transcript analytics filler words',
    url='https://github.com/jsugg/speech-analytics/',
    description='Live transcript analytics for streaming speech recognition',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
