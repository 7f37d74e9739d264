# kubeshark

Building blocks for the client side of an API traffic analyzer that runs
inside Kubernetes. It is a library: every module is imported and called from
your own code, and there is no command to run.

Python 3.10 or later is needed. The package depends on `requests` and
`pyyaml`; the `test` extra adds `pytest` and `responses`.

## Modules

- `kubeshark.semver`: `SemVersion`, a `str` subclass that takes the first
  three runs of digits of a version string as major, minor and patch
  (`is_valid`, `breakdown`, `major`, `minor`, `patch`, `greater_than`).
  The parts are compared as strings, exactly as they appear.
- `kubeshark.pods`: the `Pod` dataclass, `is_pod_running`,
  `filter_pods_matching`, `running_pods_matching`, `resolve_namespaces`
  (configured namespaces without repeats, or all namespaces from a callable,
  minus the excluded ones) and `validate_kubernetes_version`, which raises
  `UnsupportedKubernetesVersion` below 1.16.0.
- `kubeshark.watch`: `WatchEvent` with `to_pod`, `to_event` and `to_error`;
  `PodWatchHelper` and `EventWatchHelper`, which filter by name pattern (and,
  for events, by the kind of object concerned) and take a callable that
  yields the watch events; `filtered_watch` / `FilteredWatch`, which run one
  worker thread per namespace, put passing events and errors on queues, restart
  a watch that closes once and report `WatchError("K8s watch unstable, closes
  frequently")` if it closes again within a minute. Also the error types
  `InvalidObjectType`, `WatchError`, `TapManagerError` and
  `ClusterBehindProxyError`.
- `kubeshark.tarcopy`: `get_prefix`, `strip_path_shortcuts`,
  `copy_destination` and `untar_all`, which unpacks a tar stream below a
  directory and raises `TarContentsCorrupted` for a member outside the
  expected prefix.
- `kubeshark.clusterconfig`: `get_config`, `set_config`, `set_secret`,
  `config_get_scripts`, `is_active_script` and
  `delete_active_script_by_title`, working on any store with `load()` and
  `save(data)`; `InMemoryStore` is one held in memory.
- `kubeshark.scripting`: `Script`, `ConfigMapScript` and `read_script_file`,
  which takes a script's title from the text of its first comment.
- `kubeshark.proxy`: `self_hub_proxied_path`, `proxy_on_port`, `hub_url`,
  `reroute_api_path`, `reroute_static_path`, `cors_headers` and
  `port_forward_spec`.
- `kubeshark.helm`: `parse_oci_ref` and `chart_path_from_env`, which reads
  `KUBESHARK_HELM_CHART_PATH`.
- `kubeshark.httputil`: `get`, `post` and `do`, which add the
  `X-Kubeshark-Capture: ignore` header (`add_ignore_capture_header`) and raise
  `HttpStatusError` for any status other than 200.
- `kubeshark.hub`: `Connector`, with `test_connection` (raises
  `ConnectionFailed` after its retries), `post_worker_pod`, `post_license`
  and `post_pcaps_merge`. The posts retry while the hub answers with another
  status than 200 and return `False` if the hub cannot be reached.
  `copy_response` copies a raw response body into a file.
- `kubeshark.versioncheck`: `fetch_latest_release`, `upgrade_command` and
  `check_newer_version`, which returns the upgrade command when the latest
  release differs from the running version and is skipped when
  `KUBESHARK_DISABLE_VERSION_CHECK` is set.
- `kubeshark.slices`: `contains`, `unique`, `equal_string_slices`, `diff`.
- `kubeshark.text`: `Color`, `colorize`, `unescape_unicode_characters`,
  `pretty_yaml`.
- `kubeshark.fsutils`: `ensure_dir`, `remove_files_by_extension`,
  `add_file_to_zip`, `add_str_to_zip`, `unzip` (rejects members that would
  land outside the destination).
- `kubeshark.browser`: `open_browser`; `kubeshark.wait`:
  `wait_for_termination`; `kubeshark.misc`: program constants and
  `get_dot_folder_path`.

## Examples

```python
from kubeshark.semver import SemVersion

server = SemVersion("v1.27.3")
server.is_valid()                             # True
server.breakdown()                            # ("1", "27", "3")
server.greater_than(SemVersion("1.16.0"))     # True
```

```python
from kubeshark.slices import diff, unique

unique(["default", "prod", "default"])        # ["default", "prod"]
diff(["default", "prod", "kube-system"], ["kube-system"])
# ["default", "prod"]
```

```python
from kubeshark.helm import ChartReferenceError, parse_oci_ref

chart, tag = parse_oci_ref("oci://registry.example.com/charts/kubeshark:52.3.0")
# chart == "oci://registry.example.com/charts/kubeshark", tag == "52.3.0"

try:
    parse_oci_ref("oci://registry.example.com/charts/kubeshark")
except ChartReferenceError as error:
    print(error)
```

```python
from kubeshark.tarcopy import strip_path_shortcuts

strip_path_shortcuts("../../var/log")         # "var/log"
```

```python
from kubeshark.clusterconfig import InMemoryStore, delete_active_script_by_title

store = InMemoryStore({"SCRIPTING_ACTIVE_SCRIPTS": "a,b,c"})
delete_active_script_by_title(store, "b")     # True
store.data["SCRIPTING_ACTIVE_SCRIPTS"]        # "a,c"
```

## What it does not do

The package contains no Kubernetes API client. It does not list pods or
namespaces, open watches, run commands in pods, read pod logs, forward ports,
serve a local proxy or install and uninstall Helm charts itself. Pods, watch
streams, tar streams and configuration stores are handed to it by the caller.
There is no command-line program.