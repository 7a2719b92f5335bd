from termcolor import colored


def title(command):
  title_header1 = colored(f"\n  {command.upper()} COMMAND - extended help","green")
  title_header2 = "\n  "
  title_header2 += colored("=".ljust(len(title_header1)-11,"="),"green")
  return "\n"+title_header1+title_header2+"\n"


def build_help(extended=False):
    help_text = '''
  usage: chiactl [--root <path>] [--log-level <level>] [--retries <n>] [-y]
                 <command> [options]

  global options:
    --root       | chia root directory (default: $CHIA_ROOT or ~/.chia/mainnet)
    --log-level  | DEBUG, INFO, WARNING, ERROR (default: INFO)
    --retries    | retry failed service requests n more times,
                   refused connections are never retried (default: 0)
    -y, --yes    | skip confirmation prompts

  Options:

    switch_network      | switch the active network of this installation
                          and move the network cache files
    show_network        | show the configured network and the network of
                          each running chia service
    edit_config         | set configuration values by dotted path
    debug               | show version, network, port and file size details
    split_largest_coin  | split the largest coin of a wallet
    remove_trusted_peer | reset the wallet trusted peers (--all)

    show_my_mirrors     | show the data layer mirrors owned by this wallet
    delete_mirrors      | delete every owned data layer mirror
    convert_keys_values | print the keys and values of a data layer store
                          converted between hex and utf8

    help                | show this menu
    version             | show version of chiactl
'''

    if not extended:
        return help_text

    if extended == "switch_network":
        help_text = title(extended)+'''
  Switch this chia installation to another network.  If the full
  node is running it is stopped, the sub-epoch-summaries and
  height-to-hash cache files are archived for the current network,
  any cache files previously archived for the target network are
  restored, every network dependent configuration value is updated
  and the full node is started again.

  usage: chiactl switch_network <network_name>
  alias: -sn

  examples:
    chiactl switch_network testneta
    chiactl --root /opt/chia switch_network mainnet
'''

    elif extended == "show_network":
        help_text = title(extended)+'''
  Show the network recorded in config.yaml together with the
  network reported by each running chia service.

  usage: chiactl show_network
  alias: -sw
'''

    elif extended == "edit_config":
        help_text = title(extended)+'''
  Edit an existing chia configuration file.

  usage: chiactl edit_config -s <path>=<value> [-s <path>=<value>]
                             [--config <file>] [--dry-run]
  alias: -ec

  examples:
    chiactl edit_config -s full_node.port=58444 -s full_node.target_peer_count=10
    chiactl edit_config --config ~/.chia/mainnet/config/config.yaml -s full_node.port=58444
    chiactl edit_config -s full_node.port=58444 --dry-run

  Environment variables in the form CHIA__<SECTION>__<KEY> are
  applied before the requested values.
'''

    elif extended == "debug":
        help_text = title(extended)+'''
  Output debugging information about this chia installation.

  usage: chiactl debug [--sort] [--all-files]

    --sort       | sort the files largest first
    --all-files  | show all files, by default typically small
                   files are excluded
'''

    elif extended == "split_largest_coin":
        help_text = title(extended)+'''
  Find the largest coin in the wallet and split it into smaller coins.

  usage: chiactl split_largest_coin -a <amount_per_coin> -n <number_of_coins>
                                    [-i <wallet_id>] [-m <fee>] [-f <fingerprint>]

    -a  | amount of each new coin in XCH (required)
    -n  | number of coins to create (required)
    -i  | wallet id (default: 1)
    -m  | fee in XCH (default: 0)
    -f  | wallet fingerprint to log in to first

  example:
    chiactl split_largest_coin -i 1 -a 0.001 -n 10 -m 0.0001
'''

    elif extended == "remove_trusted_peer":
        help_text = title(extended)+'''
  Remove every trusted peer from the wallet configuration.  The
  trusted peers are reset to the placeholder entry chia ships with
  and the wallet full node peers are reset to the local full node.

  usage: chiactl remove_trusted_peer --all [--config <file>]
  alias: -rtp

  Removing a single peer requires its node id, use chia itself for
  that.
'''

    elif extended == "show_my_mirrors":
        help_text = title(extended)+'''
  Show the mirrors owned by this wallet for every data layer
  subscription, or for a single store.

  usage: chiactl show_my_mirrors [--id <store_id>]
'''

    elif extended == "delete_mirrors":
        help_text = title(extended)+'''
  Delete every mirror owned by this wallet across all data layer
  subscriptions.  The fee is paid per mirror.

  usage: chiactl delete_mirrors [-m <fee>]

    -m, --fee  | fee in XCH for each deletion (default: 0)
'''

    elif extended == "convert_keys_values":
        help_text = title(extended)+'''
  Print the keys and values of a data layer store converted from
  one encoding to another.

  usage: chiactl convert_keys_values --id <store_id>
                 [--input-format hex|utf8] [--output-format hex|utf8]

  defaults: --input-format hex --output-format utf8
'''

    return help_text
