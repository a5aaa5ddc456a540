# oceanlab

Two small simulation programs for the command line:

* **Wa-tor**, the toroidal ocean where fish and sharks move, breed, eat and
  starve. It comes in several flavours that share the same rules: a plain
  sequential loop (clock-seeded or with a fixed seed), a version driven by a
  set of worker threads that claim rows one at a time, and a version that
  sweeps the ocean in three stripes of rows on a worker pool. In both
  threaded versions rows worked on at the same moment are three apart, so
  their neighbourhoods never overlap.
* **Mandel**, a Mandelbrot set renderer that writes a raw gray or RGB image.

The package itself has no dependencies. Some optional outputs hand their
data to external tools, which must be on your `PATH` if you ask for them:
`rawtopgm`, `rawtoppm` and `pnmtopng` (netpbm), `eog`, `gnuplot` and `ffplay`.
The package does not draw anything on screen by itself; viewing images,
video and plots is left to those tools.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Wa-tor

```
oceanlab-wator [options]
oceanlab-wator-fixed [options]
oceanlab-wator-threads -nt <threads> [options]
oceanlab-wator-striped [options]
```

* `oceanlab-wator` seeds its random numbers from the clock; the default
  ocean is 100x100 and any size of at least 3 is accepted.
* `oceanlab-wator-fixed` uses the fixed seed 0, so runs can be repeated.
* `oceanlab-wator-threads` places the animals with the fixed seed 0; each
  worker thread then draws from its own generator seeded with its index.
  Since threads claim rows as they become free, runs with more than one
  thread need not repeat exactly.
* `oceanlab-wator-striped` seeds the placement from the clock and uses one
  worker per available CPU, printing the count at start-up. Each block of
  rows always uses the same random stream, so for a given placement the
  result does not depend on thread scheduling.

The fixed, threaded and striped versions use a 102x102 default ocean and
require the numbers of rows and columns to be multiples of 3.

| Option | Meaning | Default |
| --- | --- | --- |
| `-h` | show the help and stop | |
| `-r <n>` | rows of the ocean | 100 or 102 |
| `-c <n>` | columns of the ocean | 100 or 102 |
| `-nf <n>` | initial fishes | 2500 |
| `-ns <n>` | initial sharks | 500 |
| `-ni <n>` | maximum number of iterations | 1000 |
| `-fb <n>` | iterations before a fish breeds | 5 |
| `-sb <n>` | iterations before a shark breeds | 40 |
| `-sie <n>` | initial energy of a shark (at most `-sb`) | 10 |
| `-sef <n>` | energy a shark gains from eating a fish | 3 |
| `-fg <file>` | raw RGB image file | `Image` |
| `-o` | write the image each iteration, convert it to `<file>.ppm` and show it with `eog` | off |
| `-ffmpeg` | stream every iteration as video to `ffplay` | off |
| `-fd <file>` | population data file | `data.txt` |
| `-d` | write the population of each iteration and plot it with `gnuplot` | off |
| `-nt <n>` | worker threads, between 1 and rows/3 (`oceanlab-wator-threads` only, required) | |

The number of fishes plus sharks may not exceed the number of cells. A bad
value prints a message and exits with status 1.

The simulation stops when the iteration limit is reached or when either
species has died out, and prints a closing line such as

```
Wa-tor ends. Niter=1000, NFishes= 3121, NSharks=687.
```

With `-d` the data file holds one tab-separated line per iteration:
iteration number, fishes, sharks. In the images and the video, empty water
is white, fish are blue and sharks are red.

### Rules

Each iteration visits every animal once. A fish moves to a random free
neighbouring cell (north, south, east or west, wrapping around the edges);
once it has lived long enough it stays put and a new fish appears in that
free cell instead. A fish with no free neighbour does nothing.

A shark loses one unit of energy per iteration and dies at zero. If a fish
is next to it, it eats a random one, moving into its cell and gaining
energy; otherwise it picks a random free neighbouring cell. A shark that
has lived long enough breeds: after eating, the newborn is left in the cell
it came from; without eating, it stays where it is and the newborn takes
the free cell. Otherwise a shark that did not eat moves to the free cell.

### Using it from Python

* `oceanlab.ocean.Ocean` holds the grid; `Ocean.populate`,
  `Ocean.iterate`, `Ocean.count`, `Ocean.to_rgb`, `Ocean.write_rgb` and
  `Ocean.render` place, advance, count and draw the animals, with
  `oceanlab.ocean.Rules` holding the breeding and energy parameters.
* `oceanlab.animals.Animal`, `Species` and `new_animal` describe the
  inhabitants.
* `oceanlab.rand48.Rand48` is the 48-bit linear congruential generator that
  drives every random choice.
* `oceanlab.wator.Simulation` ties an ocean to its population counters, and
  `oceanlab.wator.Outputs` handles image, video and data output.
* `oceanlab.threaded.ThreadedIterator` and
  `oceanlab.striped.StripedIterator` advance an ocean with several workers;
  both are context managers whose `iterate` can replace
  `Simulation.iterate`.

```python
from oceanlab.ocean import Ocean, Rules
from oceanlab.rand48 import Rand48
from oceanlab.animals import Species

rules = Rules()
rng = Rand48(0)
ocean = Ocean(12, 12)
ocean.populate(40, 8, rules, rng)
d_fish, d_shark = ocean.iterate(0, rules, rng)
print(ocean.render(), ocean.count(Species.FISH))
```

`oceanlab.textutil` has small helpers that format number vectors and
matrices as comma-separated text.

## Mandel

```
oceanlab-mandel -r <rows> -c <cols> -mx <min x> -my <min y> \
                -sx <size x> -sy <size y> -mi <max iterations> [-o <file>] [-g]
```

All options except `-o` and `-g` are required; a missing one prints the help.
Rows and columns must be greater than 3 and the iteration limit at least 1.
The image is written as raw bytes to `<file>` (default `Image`) and then
converted to `<file>.png` with the netpbm tools. With `-g` the image is
gray, one byte per pixel, proportional to the escape count; without it each
pixel is coloured from a 16-entry palette.

Example:

```
oceanlab-mandel -r 600 -c 800 -mx -2.0 -my -1.2 -sx 3.0 -sy 2.4 -mi 500 -o set
```

The same computation is available from Python through
`oceanlab.mandel.escape_counts`, `oceanlab.mandel.render_gray` and
`oceanlab.mandel.render_rgb`.