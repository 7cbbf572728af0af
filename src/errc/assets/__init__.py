"""
Packaged assets for errc. At the moment this is just the default configuration.
"""
import io
import pkgutil


def getAssetAsString(fn, package="errc.assets"):
    """Find a file in the assets package and return its contents as a string, assuming it is utf-8 encoded"""
    s = pkgutil.get_data(package, fn)
    if s is None:
        raise ValueError(f'cannot find asset {fn}')
    return s.decode('utf-8')


def getAssetAsFile(fn, package="errc.assets"):
    """Find a file in the assets package and return it as a file-like object"""
    return io.StringIO(getAssetAsString(fn, package=package))
