from setuptools import setup, find_packages


with open('midi2mml/_version.py') as f:
    for line in f.readlines():
        if '__version__ =' in line:
            exec(line)


with open('README.md') as f:
    readme = f.readlines()
readme = ''.join(readme[1:])  # Skip the first line


setup(
    name="midi2mml",
    version=__version__,
    author="The midi2mml authors",
    description="A converter from standard MIDI files to MML (Music Macro Language) text",
    long_description=readme,
    long_description_content_type='text/markdown',
    keywords="MIDI, standard MIDI files, MML, quantization",
    license="BSD-3-Clause",
    python_requires=">=3.6",
    install_requires=["Arpeggio>=1.9"],
    extras_require={
        "test": ["pytest"],
    },
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "midi2mml = midi2mml.midi2mmlcmd:main",
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Sound/Audio :: MIDI',
    ],
)
