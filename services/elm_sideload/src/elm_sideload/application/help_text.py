HELP_TEXT = """\
elm-sideload: override Elm packages in ELM_HOME with your own sources

getting help:

  elm-sideload
  elm-sideload help
      Prints the text that you see here.

getting started:

  elm-sideload init
      Creates 'elm.sideload.json', creates the '.elm.sideload.cache' folder in
      your working directory, and adds '.elm.sideload.cache' to '.gitignore'.
      Fails if 'elm.sideload.json' already exists or there is no 'elm.json'.

updating your sideload configuration:

  elm-sideload configure <author/package> --github <url> --branch <branch>
      Sideload from a git repository, pinned to the commit the branch points
      at right now. The branch name itself is never stored, so later installs
      are reproducible even if the branch moves.

  elm-sideload configure <author/package> --github <url> --sha <sha>
      Sideload from a git repository pinned to a specific commit.

  elm-sideload configure <author/package> --relative <folder>
      Sideload from a local folder, the one that contains the package's
      'elm.json'.

  'configure' only accepts packages that appear in your 'elm.json' (direct,
  indirect or test dependencies) and records the version found there.
  Running it again for the same package replaces the previous entry.

applying your sideload configuration:

  elm-sideload install
      Checks the configuration, shows where ELM_HOME packages live, and asks
      for confirmation before overwriting anything. No answer in time, or any
      answer other than 'y', exits without changes. Every sideload source is
      fetched or located first; if any of them is unavailable nothing is
      installed and you get a list of which packages were and were not
      available.

  elm-sideload install --always
      Same checks, no confirmation.

  elm-sideload install --dry-run
      Reports what would be installed without cloning, fetching or writing.

undoing your sideload configuration:

  elm-sideload unload
      Deletes the sideloaded packages from ELM_HOME so the Elm compiler
      downloads the official versions again. 'elm.sideload.json' is kept.

common options:

  --json       print a machine-readable result document
  --verbose    log what is happening to stderr

ELM_HOME:

  Packages are written to '<ELM_HOME>/0.19.1/packages'. Without ELM_HOME the
  default is '~/.elm' ('%APPDATA%/elm' on Windows), unless 'requireElmHome'
  is true in 'elm.sideload.json', in which case a missing ELM_HOME is an
  error. 'elmHomePackagesPath' pins the packages directory explicitly.
"""
