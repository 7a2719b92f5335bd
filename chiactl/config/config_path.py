import yaml

from ..troubleshoot.errors import ConfigFieldFailure


class ConfigPath():
    """A dotted configuration path parsed once into segment tokens.

    ``ConfigPath("full_node.introducer_peer.host").segments`` is
    ``("full_node", "introducer_peer", "host")``.  Resolution against a
    document only succeeds when every segment but the last names a
    mapping and the last segment names an existing key, so invalid paths
    are caught before anything is mutated.
    """

    def __init__(self,dotted):
        if not isinstance(dotted,str) or dotted.strip() == "":
            raise ConfigFieldFailure(f"invalid configuration path [{dotted}]")
        self.dotted = dotted.strip()
        self.segments = tuple(self.dotted.split("."))
        if any(segment == "" for segment in self.segments):
            raise ConfigFieldFailure(f"invalid configuration path [{dotted}] empty segment")


    def __repr__(self):
        return f"ConfigPath({self.dotted!r})"


    def __str__(self):
        return self.dotted


    def __eq__(self,other):
        return isinstance(other,ConfigPath) and other.segments == self.segments


    def __hash__(self):
        return hash(self.segments)


    def resolve_parent(self,document):
        # returns the mapping holding the last segment
        current = document
        for n, segment in enumerate(self.segments[:-1]):
            if not isinstance(current,dict) or segment not in current:
                section = ".".join(self.segments[:n+1])
                raise ConfigFieldFailure(f"section [{section}] not found while resolving [{self.dotted}]")
            current = current[segment]
        if not isinstance(current,dict):
            raise ConfigFieldFailure(f"[{'.'.join(self.segments[:-1])}] is not a section while resolving [{self.dotted}]")
        return current


    def exists(self,document):
        try:
            parent = self.resolve_parent(document)
        except ConfigFieldFailure:
            return False
        return self.segments[-1] in parent


    def get(self,document):
        parent = self.resolve_parent(document)
        key = self.segments[-1]
        if key not in parent:
            raise ConfigFieldFailure(f"key [{key}] not found while resolving [{self.dotted}]")
        return parent[key]


    def validate(self,document,value):
        """Return ``value`` coerced to the type of the existing field."""
        return coerce_value(self,self.get(document),value)


    def set(self,document,value):
        value = self.validate(document,value)
        self.resolve_parent(document)[self.segments[-1]] = value
        return value


def coerce_value(config_path,current,value):
    if current is None or value is None:
        return value

    if isinstance(value,str) and not isinstance(current,str):
        try:
            value = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise ConfigFieldFailure(f"unable to parse value for [{config_path}] [{e}]")

    if isinstance(current,bool):
        if isinstance(value,bool): return value
    elif isinstance(current,int):
        if isinstance(value,int) and not isinstance(value,bool): return value
    elif isinstance(current,float):
        if isinstance(value,(int,float)) and not isinstance(value,bool): return float(value)
    elif isinstance(current,str):
        if isinstance(value,(str,int,float)) and not isinstance(value,bool): return str(value)
    elif isinstance(current,list):
        if isinstance(value,list): return value
    elif isinstance(current,dict):
        if isinstance(value,dict): return value
    else:
        return value

    raise ConfigFieldFailure(
        f"value [{value}] type [{type(value).__name__}] does not match [{config_path}] type [{type(current).__name__}]"
    )
