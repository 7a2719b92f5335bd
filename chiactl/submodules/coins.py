import logging

from hashlib import sha256

from ..troubleshoot.errors import InvalidArgument, RpcFailure

MOJO_PER_XCH = 1000000000000
MOJO_DECIMALS = 12


def convert_xch_to_mojos(xch_str):
    xch_str = str(xch_str).strip()
    if xch_str in ["","0"]:
        return 0

    parts = xch_str.split(".")
    if len(parts) > 2:
        raise InvalidArgument(f"invalid XCH amount format [{xch_str}]")

    whole = parts[0] or "0"
    decimal = parts[1] if len(parts) == 2 else ""
    if not whole.isdigit():
        raise InvalidArgument(f"invalid whole number part [{parts[0]}]")
    if decimal and not decimal.isdigit():
        raise InvalidArgument(f"invalid decimal part [{decimal}]")

    # anything past 12 decimal places is truncated
    decimal = (decimal + "0" * MOJO_DECIMALS)[:MOJO_DECIMALS]
    return int(whole) * MOJO_PER_XCH + int(decimal)


def int_to_bytes(value):
    # minimal big endian two's complement, 0 encodes to b""
    if value == 0:
        return b""
    result = value.to_bytes((value.bit_length() + 8) >> 3,"big",signed=True)
    while len(result) > 1 and result[0] == (0xFF if result[1] & 0x80 else 0):
        result = result[1:]
    return result


def get_coin_id(coin):
    parent = bytes.fromhex(coin["parent_coin_info"].replace("0x","",1))
    puzzle_hash = bytes.fromhex(coin["puzzle_hash"].replace("0x","",1))
    return "0x" + sha256(parent + puzzle_hash + int_to_bytes(int(coin["amount"]))).hexdigest()


class SplitLargestCoin():

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.functions = command_obj.get("functions",None)
        self.wallet = command_obj["wallet_rpc"]

        self.wallet_id = int(command_obj.get("wallet_id",1))
        self.fingerprint = command_obj.get("fingerprint",None)
        self.number_of_coins = int(command_obj.get("number_of_coins",0))
        self.amount_per_coin = convert_xch_to_mojos(command_obj.get("amount_per_coin",""))
        self.fee = convert_xch_to_mojos(command_obj.get("fee","0"))

        if self.amount_per_coin == 0:
            raise InvalidArgument("amount-per-coin must be specified")
        if self.number_of_coins <= 0:
            raise InvalidArgument("number-of-coins must be greater than 0")


    def get_largest_coin(self):
        if self.fingerprint:
            self.log.debug(f"logging in to wallet fingerprint [{self.fingerprint}]")
            self.wallet.fetch("log_in",{"fingerprint": int(self.fingerprint)})

        self.log.debug(f"getting spendable coins | wallet_id [{self.wallet_id}]")
        response = self.wallet.fetch("get_spendable_coins",{"wallet_id": self.wallet_id})
        records = response.get("confirmed_records") or []
        if not records:
            raise RpcFailure(f"no spendable coins found in wallet [{self.wallet_id}]")

        largest = max(records,key=lambda record: int(record["coin"]["amount"]))
        if int(largest["coin"]["amount"]) == 0:
            raise RpcFailure(f"no coins with value found in wallet [{self.wallet_id}]")
        return largest["coin"]


    def get_total_needed(self):
        return self.amount_per_coin * self.number_of_coins + self.fee


    def process_split(self):
        coin = self.get_largest_coin()
        coin_id = get_coin_id(coin)
        amount = int(coin["amount"])
        self.log.info(f"found largest coin | coin_id [{coin_id}] amount [{amount}] wallet_id [{self.wallet_id}]")

        total_needed = self.get_total_needed()
        if amount < total_needed:
            raise InvalidArgument(
                f"largest coin does not have enough value for split | coin_amount [{amount}] total_needed [{total_needed}] "
                f"amount_per_coin [{self.amount_per_coin}] number_of_coins [{self.number_of_coins}] fee [{self.fee}]"
            )

        if self.functions:
            self.functions.print_paragraphs([
                ["Splitting coin",0], [coin_id,1,"yellow"],
                ["into",0], [str(self.number_of_coins),0,"yellow","bold"], ["coins of",0],
                [f"{self.amount_per_coin} mojos",0,"yellow","bold"], ["with a fee of",0], [f"{self.fee} mojos",2,"yellow","bold"],
            ])
            if not self.functions.confirm_action({
                "yes_no_default": "n",
                "return_on": "y",
                "prompt": "Split this coin?",
                "exit_if": False,
            }):
                self.log.error("Cancelled")
                return None

        self.log.info(f"splitting coin | coin_id [{coin_id}] amount_per_coin [{self.amount_per_coin}] number_of_coins [{self.number_of_coins}] fee [{self.fee}]")
        response = self.wallet.fetch("split_coins",{
            "wallet_id": self.wallet_id,
            "target_coin_id": coin_id,
            "amount_per_coin": self.amount_per_coin,
            "number_of_coins": self.number_of_coins,
            "fee": self.fee,
            "push": True,
        })
        transaction_id = response.get("transaction_id")
        if transaction_id:
            print(f"  Successfully split coin. Transaction ID: {transaction_id}")
        else:
            print("  Coin split initiated successfully")
        return transaction_id
